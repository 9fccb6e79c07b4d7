import json
from decimal import Decimal

from oas_contract_verify.failures import (
    ExcessRequiredParameter,
    IncompatibleParameter,
    MissingHttpMethod,
    MissingParameter,
    MissingPath,
    ParameterConstraints,
)
from oas_contract_verify.model import ParameterKind, SchemaType
from oas_contract_verify.report import describe, render_json, render_text, sort_failures

Q = ParameterKind.QUERY

INCOMPATIBLE = IncompatibleParameter(
    path="/pets",
    method="get",
    parameter_name="limit",
    parameter_kind=Q,
    contract_constraints=ParameterConstraints(type=SchemaType.INTEGER, is_required=False, maximum=Decimal(100)),
    candidate_constraints=ParameterConstraints(type=SchemaType.INTEGER, is_required=False, maximum=Decimal(500)),
)


class TestDescribe:
    def test_missing_path(self):
        assert describe(MissingPath(path="/stores")) == "/stores: path removed"

    def test_missing_method(self):
        assert describe(MissingHttpMethod(path="/pets", method="delete")) == "DELETE /pets: operation removed"

    def test_missing_parameter(self):
        f = MissingParameter(path="/pets", method="get", parameter_name="tag", parameter_kind=Q)
        assert describe(f) == "GET /pets: query parameter 'tag' removed"

    def test_excess_required(self):
        f = ExcessRequiredParameter(path="/pets", method="get", parameter_name="owner", parameter_kind=Q)
        assert describe(f) == "GET /pets: new required query parameter 'owner'"

    def test_incompatible_lists_only_changed_fields(self):
        assert describe(INCOMPATIBLE) == "GET /pets: query parameter 'limit' changed (maximum: 100 -> 500)"

    def test_incompatible_shows_unset_bounds(self):
        f = INCOMPATIBLE.model_copy(
            update={"candidate_constraints": ParameterConstraints(type=SchemaType.STRING, is_required=False)}
        )
        assert "type: integer -> string" in describe(f)
        assert "maximum: 100 -> unset" in describe(f)


class TestRender:
    def test_text_no_failures(self):
        assert render_text([]) == "No breaking changes found."

    def test_text_with_summary(self):
        text = render_text([MissingPath(path="/a"), MissingPath(path="/b")])
        assert text.splitlines() == ["/a: path removed", "/b: path removed", "", "2 breaking change(s) found."]

    def test_json_is_tagged(self):
        data = json.loads(render_json([MissingPath(path="/a"), INCOMPATIBLE]))
        assert data[0] == {"path": "/a", "kind": "missing_path"}
        assert data[1]["kind"] == "incompatible_parameter"
        assert data[1]["parameter_kind"] == "query"
        assert data[1]["contract_constraints"]["type"] == "integer"


class TestSortFailures:
    def test_sorted_by_path_method_kind_and_name(self):
        b = MissingParameter(path="/pets", method="get", parameter_name="b", parameter_kind=Q)
        a = MissingParameter(path="/pets", method="get", parameter_name="a", parameter_kind=Q)
        root = MissingPath(path="/a")
        method = MissingHttpMethod(path="/pets", method="delete")
        assert sort_failures([b, method, a, root]) == [root, method, a, b]
