from db.entities import (  # noqa: F401
    Base,
    DomainFormModel,
    DomainModel,
    DomainOperationModel,
    DomainStorageTable,
    DomainViewModel,
    FormModel,
    OperationModel,
    StorageModel,
    StorageTable,
    ViewModel,
)
from db.database import SessionLocal, engine, get_session, init_db  # noqa: F401
