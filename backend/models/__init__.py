from models.connection import ConnectionParams, ImportRequest, normalize_port  # noqa: F401
from models.table import ColumnMeta, TableSchema, CatalogTableRow, CatalogColumnRow  # noqa: F401
from models.view import CreateViewRequest, LayoutField, ViewLayout  # noqa: F401
from models.form import CreateFormRequest, FormField, FormSchema, FORM_COMPONENTS  # noqa: F401
from models.operation import CreateOperationRequest, OperationType  # noqa: F401
from models.domain import CreateDomainRequest, DomainField, DomainSchema  # noqa: F401
