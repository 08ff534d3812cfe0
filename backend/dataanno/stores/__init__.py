from dataanno.stores.classification import SqlClassificationStore
from dataanno.stores.data_records import SqlDataRecordStore
from dataanno.stores.objects import SqlObjectPersistence

__all__ = ["SqlClassificationStore", "SqlDataRecordStore", "SqlObjectPersistence"]
