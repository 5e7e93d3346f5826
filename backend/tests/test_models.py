import pytest
from pydantic import ValidationError

from models.connection import ConnectionParams, ImportRequest, normalize_port
from models.domain import CreateDomainRequest
from models.operation import CreateOperationRequest
from models.view import CreateViewRequest


@pytest.mark.parametrize("value,expected", [
    (None, 3306),
    (3307, 3307),
    ("5506", 5506),
    (" 3310 ", 3310),
    ("", 3306),
    ("not-a-port", 3306),
    (0, 3306),
    (-1, 3306),
    ("inf", 3306),
    ("3307.9", 3306),
    (3307.5, 3306),
    ("3307.0", 3307),
    (True, 3306),
])
def test_normalize_port(value, expected):
    assert normalize_port(value) == expected


def test_connection_params_defaults():
    params = ConnectionParams(host="localhost", user="root", database="shop", password=None)
    assert params.port == 3306
    assert params.password == ""
    url = params.get_sqlalchemy_url()
    assert url.drivername == "mysql+pymysql"
    assert (url.username, url.host, url.port, url.database) == ("root", "localhost", 3306, "shop")


def test_connection_url_escapes_credentials():
    params = ConnectionParams(host="db", user="app", password="p@ss/word", database="crm")
    assert params.get_sqlalchemy_url().password == "p@ss/word"
    assert "p%40ss%2Fword" in params.get_sqlalchemy_url().render_as_string(hide_password=False)


def test_import_request_requires_name():
    with pytest.raises(ValidationError):
        ImportRequest.model_validate({
            "name": "",
            "connection": {"host": "h", "user": "u", "database": "d"},
        })


def test_view_layout_document_drops_unset_keys():
    req = CreateViewRequest.model_validate({
        "name": "v",
        "storageModelId": "m",
        "storageTableId": "t",
        "layout": {"fields": [{"column": "a", "label": "A"}]},
    })
    assert req.layout_document() == {"fields": [{"column": "a", "label": "A"}]}


def test_domain_request_dedupes_ids_in_order():
    req = CreateDomainRequest.model_validate({
        "name": "d",
        "schema": {"fields": [{"key": "k", "name": "K", "description": None}]},
        "storageTableIds": ["t2", "t1", "t2"],
        "viewModelIds": None,
    })
    assert req.storage_table_ids == ["t2", "t1"]
    assert req.view_model_ids == []
    assert req.form_model_ids == []
    assert req.schema_document() == {"fields": [{"key": "k", "name": "K", "description": None}]}


def test_domain_request_rejects_blank_ids():
    with pytest.raises(ValidationError):
        CreateDomainRequest.model_validate({
            "name": "d",
            "schema": {"fields": [{"key": "k", "name": "K"}]},
            "operationModelIds": [""],
        })


def test_operation_request_defaults():
    req = CreateOperationRequest.model_validate({"name": "op"})
    assert req.type == "READ"
    assert req.request_schema is None
