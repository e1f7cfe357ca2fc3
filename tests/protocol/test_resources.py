import pytest
from pydantic import ValidationError

from mcpkit.protocol.resources import (
    ListResourcesResult,
    ReadResourceRequestParams,
    ResourceMetadata,
)
from mcpkit.protocol.schema import PrimitiveSchema


class TestResourceMetadata:
    def test_defaults(self):
        # Act
        resource = ResourceMetadata(identifier="readme", name="Readme")

        # Assert
        assert resource.mime_type == "text/plain"
        assert resource.parameters == {}

    def test_mime_type_alias(self):
        # Act
        resource = ResourceMetadata.from_protocol(
            {"identifier": "h", "name": "H", "mimeType": "application/json"}
        )

        # Assert
        assert resource.mime_type == "application/json"
        assert resource.to_protocol()["mimeType"] == "application/json"

    def test_parameters_are_parsed_strictly(self):
        # Act
        resource = ResourceMetadata(
            identifier="user", name="User", parameters={"id": "int"}
        )

        # Assert
        assert resource.parameters == {"id": PrimitiveSchema("int")}
        with pytest.raises(ValidationError):
            ResourceMetadata(identifier="u", name="U", parameters={"id": 7})


class TestResourceRequests:
    def test_read_params(self):
        # Act
        params = ReadResourceRequestParams.from_protocol(
            {"identifier": "user", "arguments": {"id": 1}}
        )

        # Assert
        assert params.native_arguments() == {"id": 1}

    def test_list_result(self):
        # Arrange
        resource = ResourceMetadata(identifier="readme", name="Readme")

        # Act
        data = ListResourcesResult(resources=[resource]).to_protocol()

        # Assert
        assert data == {
            "resources": [
                {
                    "identifier": "readme",
                    "name": "Readme",
                    "mimeType": "text/plain",
                    "parameters": {},
                }
            ]
        }
