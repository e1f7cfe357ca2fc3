import math

import pytest
from pydantic import ValidationError

from mcpkit.protocol.base import INVALID_PARAMS, Error, Request, Response
from mcpkit.protocol.dynamic import Array, Float, Int, Null, Object, String
from mcpkit.shared.errors import DecodingError, EncodingError


class TestRequest:
    def test_params_default_to_empty_object(self):
        # Act
        request = Request(id=1, method="tools/list")

        # Assert
        assert request.params == Object({})
        assert request.params_as_dict() == {}

    def test_params_are_stored_as_dynamic_values(self):
        # Act
        request = Request.from_protocol(
            {"id": "a", "method": "tools/call", "params": {"name": "sum"}}
        )

        # Assert
        assert request.params == Object({"name": String("sum")})
        assert request.params_as_dict() == {"name": "sum"}

    def test_non_object_params_give_empty_dict(self):
        # Arrange
        request = Request(id=1, method="x", params=[1, 2])

        # Act & Assert
        assert request.params == Array((Int(1), Int(2)))
        assert request.params_as_dict() == {}

    def test_from_json_goes_through_the_codec(self):
        # Act
        request = Request.from_json(b'{"id":7,"method":"m","params":{"n":2.0}}')

        # Assert
        assert request.id == 7
        assert request.params == Object({"n": Int(2)})

    def test_from_json_rejects_malformed_input(self):
        # Act & Assert
        with pytest.raises(DecodingError):
            Request.from_json(b'{"id":7,')

    def test_unsupported_params_fail_validation(self):
        # Act & Assert
        with pytest.raises(ValidationError):
            Request(id=1, method="m", params={"when": object()})

    def test_to_json_is_compact(self):
        # Arrange
        request = Request(id=1, method="m", params={"a": [1, "b"]})

        # Act & Assert
        assert request.to_json() == b'{"id":1,"method":"m","params":{"a":[1,"b"]}}'


class TestResponse:
    def test_success_wraps_native_results(self):
        # Act
        response = Response.success(1, {"value": 1.5})

        # Assert
        assert not response.is_error
        assert response.result == Object({"value": Float(1.5)})
        assert response.to_protocol() == {"id": 1, "result": {"value": 1.5}}

    def test_none_result_is_sent_as_null(self):
        # Act
        response = Response.success(1, None)

        # Assert
        assert not response.is_error
        assert response.result == Null()
        assert response.to_json() == b'{"id":1,"result":null}'

    def test_failure_carries_error_details(self):
        # Act
        response = Response.failure(
            "r1", INVALID_PARAMS, "Invalid params", data={"errors": [{"path": "a"}]}
        )

        # Assert
        assert response.is_error
        assert response.error == Error(
            code=INVALID_PARAMS,
            message="Invalid params",
            data={"errors": [{"path": "a"}]},
        )
        assert response.to_protocol() == {
            "id": "r1",
            "error": {
                "code": -32602,
                "message": "Invalid params",
                "data": {"errors": [{"path": "a"}]},
            },
        }

    def test_non_finite_result_fails_to_encode(self):
        # Arrange
        response = Response.success(1, {"value": math.nan})

        # Act & Assert
        with pytest.raises(EncodingError):
            response.to_json()

    def test_json_round_trip(self):
        # Arrange
        response = Response.success("abc", {"items": [1, 2.5, "x", None, True]})

        # Act
        decoded = Response.from_json(response.to_json())

        # Assert
        assert decoded == response
