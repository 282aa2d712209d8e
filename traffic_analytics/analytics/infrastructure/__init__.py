from omegaconf import DictConfig

from .repositories import InMemoryTrafficRecordStore, SqlAlchemyTrafficRecordStore
from ...common.database import build_engine, build_session_factory, init_db


def create_store(store_cfg: DictConfig):
    """Selects the record store named by `store.type`."""
    if store_cfg.type == 'memory':
        return InMemoryTrafficRecordStore()
    engine = build_engine(store_cfg.url, echo=store_cfg.get('echo', False))
    init_db(engine)
    return SqlAlchemyTrafficRecordStore(build_session_factory(engine))


__all__ = ["InMemoryTrafficRecordStore", "SqlAlchemyTrafficRecordStore", "create_store"]
