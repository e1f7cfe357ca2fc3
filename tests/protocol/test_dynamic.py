import pytest

from mcpkit.protocol.content import Annotations
from mcpkit.protocol.dynamic import (
    INT64_MAX,
    INT64_MIN,
    Array,
    Bool,
    DynamicValue,
    Float,
    Int,
    Null,
    Object,
    String,
)
from mcpkit.shared.errors import UnsupportedValueError


class TestFromNative:
    def test_scalars_map_to_their_variants(self):
        # Act & Assert
        assert DynamicValue.from_native(None) == Null()
        assert DynamicValue.from_native(True) == Bool(True)
        assert DynamicValue.from_native(7) == Int(7)
        assert DynamicValue.from_native(1.5) == Float(1.5)
        assert DynamicValue.from_native("hi") == String("hi")

    def test_bool_is_never_an_int(self):
        # Act
        value = DynamicValue.from_native(False)

        # Assert
        assert isinstance(value, Bool)
        assert value != Int(0)

    def test_nested_containers_become_arrays_and_objects(self):
        # Arrange
        native = {"key": 123, "tags": ["a", None], "pair": (1, 2.5)}

        # Act
        value = DynamicValue.from_native(native)

        # Assert
        assert value == Object(
            {
                "key": Int(123),
                "tags": Array((String("a"), Null())),
                "pair": Array((Int(1), Float(2.5))),
            }
        )

    def test_existing_dynamic_value_is_returned_unchanged(self):
        # Arrange
        value = Object({"a": Int(1)})

        # Act & Assert
        assert DynamicValue.from_native(value) is value

    def test_dynamic_values_can_be_mixed_into_native_data(self):
        # Act
        value = DynamicValue.from_native({"a": Int(1), "b": [String("x")]})

        # Assert
        assert value == Object({"a": Int(1), "b": Array((String("x"),))})

    def test_pydantic_model_converts_to_its_aliased_dump(self):
        # Arrange
        annotations = Annotations(audience="user", priority=0.5)

        # Act
        value = DynamicValue.from_native(annotations)

        # Assert
        assert value == Object(
            {"audience": Array((String("user"),)), "priority": Float(0.5)}
        )

    def test_int64_bounds_are_accepted(self):
        # Act & Assert
        assert DynamicValue.from_native(INT64_MAX) == Int(INT64_MAX)
        assert DynamicValue.from_native(INT64_MIN) == Int(INT64_MIN)

    def test_out_of_range_int_raises(self):
        # Act & Assert
        with pytest.raises(UnsupportedValueError):
            DynamicValue.from_native(INT64_MAX + 1)

    def test_non_string_keys_raise(self):
        # Act & Assert
        with pytest.raises(UnsupportedValueError, match="keys must be strings"):
            DynamicValue.from_native({1: "one"})

    def test_unsupported_type_raises(self):
        # Act & Assert
        with pytest.raises(UnsupportedValueError, match="set"):
            DynamicValue.from_native({"values": {1, 2}})

    def test_self_containing_list_raises(self):
        # Arrange
        cyclic = [1]
        cyclic.append(cyclic)

        # Act & Assert
        with pytest.raises(UnsupportedValueError, match="contains itself"):
            DynamicValue.from_native(cyclic)

    def test_shared_but_acyclic_references_are_allowed(self):
        # Arrange
        shared = {"n": 1}

        # Act
        value = DynamicValue.from_native([shared, shared])

        # Assert
        assert value == Array((Object({"n": Int(1)}), Object({"n": Int(1)})))

    def test_unsupported_value_error_is_a_value_error(self):
        # Act & Assert
        with pytest.raises(ValueError):
            DynamicValue.from_native(object())


class TestVariants:
    def test_equality_is_variant_sensitive(self):
        # Assert
        assert Int(1) != Float(1.0)
        assert Bool(True) != Int(1)
        assert String("1") != Int(1)
        assert Null() == Null()

    def test_equality_is_structural(self):
        # Assert
        assert Object({"a": Array((Int(1),))}) == Object({"a": Array((Int(1),))})
        assert Object({"a": Int(1)}) != Object({"a": Int(2)})

    def test_int_rejects_values_outside_64_bits(self):
        # Act & Assert
        with pytest.raises(UnsupportedValueError):
            Int(INT64_MIN - 1)

    def test_float_can_hold_non_finite_values(self):
        # Act
        value = Float(float("inf"))

        # Assert
        assert value.value == float("inf")

    def test_object_item_access(self):
        # Arrange
        value = Object({"name": String("Erio")})

        # Act & Assert
        assert value["name"] == String("Erio")
        assert value.get("missing") is None
        with pytest.raises(KeyError):
            value["missing"]

    def test_to_native_unwraps_recursively(self):
        # Arrange
        value = Object(
            {
                "n": Null(),
                "items": Array((Int(1), Float(2.5), Bool(False), String("x"))),
            }
        )

        # Act
        native = value.to_native()

        # Assert
        assert native == {"n": None, "items": [1, 2.5, False, "x"]}
        assert isinstance(native["items"], list)

    @pytest.mark.parametrize(
        "build",
        [
            lambda: Bool(1),
            lambda: Int(True),
            lambda: Int("5"),
            lambda: Float(1),
            lambda: String(5),
            lambda: Array([Int(1)]),
            lambda: Array((1, 2)),
            lambda: Object({"a": 1}),
            lambda: Object({1: Int(1)}),
        ],
    )
    def test_variants_reject_payloads_outside_their_type(self, build):
        # Act & Assert
        with pytest.raises(UnsupportedValueError):
            build()
