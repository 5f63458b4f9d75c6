from .base import StorageBackend
from .kv import KeyValueStore, SqlKeyValueStore
from .local import LocalStorage
from .cloud import CloudStorage
from .row_store import AccessPolicy, RowStore, RowStoreError, RowStorePermissionError, SqlRowStore
from .template import DemoTemplateService, SyncResult, SYNCED, LOCAL_ONLY, REJECTED
from .router import PersistenceRouter, SessionContext, MODE_DEMO, MODE_STORE

__all__ = [
    "StorageBackend",
    "KeyValueStore", "SqlKeyValueStore",
    "LocalStorage", "CloudStorage",
    "AccessPolicy", "RowStore", "RowStoreError", "RowStorePermissionError", "SqlRowStore",
    "DemoTemplateService", "SyncResult", "SYNCED", "LOCAL_ONLY", "REJECTED",
    "PersistenceRouter", "SessionContext", "MODE_DEMO", "MODE_STORE",
]
