from core.errors import ModelingError  # noqa: F401
from core.serializers import serialize_dashboard, extract_domain_fields  # noqa: F401
from core.schema_importer import import_storage_model, fetch_catalog  # noqa: F401
from core.modeling import (  # noqa: F401
    create_view_model,
    create_form_model,
    create_operation_model,
    create_domain_model,
    load_dashboard,
)
