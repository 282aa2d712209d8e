import argparse
import datetime
import os
import random

# Half-hourly counts for a few days, with morning and evening rush hours
START_DATE = datetime.datetime(2021, 12, 1)
RUSH_HOURS = [7, 8, 9, 17, 18, 19]

def generate_data(days: int = 7, output_file: str = "data/generated-traffic.txt", seed: int = None):
    print(f"Generating {days} days of half-hourly traffic counts...")
    rng = random.Random(seed)

    lines = []
    for day in range(days):
        current = START_DATE + datetime.timedelta(days=day)
        for slot in range(48):
            timestamp = current + datetime.timedelta(minutes=30 * slot)
            if timestamp.hour in RUSH_HOURS:
                count = rng.randint(30, 60)
            elif 6 <= timestamp.hour <= 22:
                count = rng.randint(8, 30)
            else:
                count = rng.randint(0, 8)
            lines.append(f"{timestamp.isoformat()} {count}")

    os.makedirs(os.path.dirname(output_file) or ".", exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    print(f"Dataset saved to {output_file} ({len(lines)} records)")

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate synthetic traffic data in bulk upload format")
    parser.add_argument("--days", type=int, default=7)
    parser.add_argument("--output", default="data/generated-traffic.txt")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()
    generate_data(days=args.days, output_file=args.output, seed=args.seed)
