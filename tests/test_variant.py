import pytest

from pxlkit.variant import BadConversion, Variant, VariantType

INT_TYPES = [
    VariantType.CHAR,
    VariantType.UCHAR,
    VariantType.INT16,
    VariantType.UINT16,
    VariantType.INT32,
    VariantType.UINT32,
    VariantType.INT64,
    VariantType.UINT64,
]


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, VariantType.BOOL),
        (7, VariantType.INT64),
        (2.5, VariantType.DOUBLE),
        ("text", VariantType.STRING),
        (None, VariantType.NONE),
        ([1, "a"], VariantType.VECTOR),
    ],
)
def test_type_inferred_from_python_value(value, expected):
    assert Variant(value).type is expected


def test_vector_elements_are_variants():
    v = Variant([1, "a"])
    assert v.value[0].type is VariantType.INT64
    assert v.value[1].type is VariantType.STRING
    assert v == [1, "a"]


def test_is_valid_and_clear():
    v = Variant(3)
    assert v.is_valid()
    v.clear()
    assert not v.is_valid()
    assert v.type is VariantType.NONE


def test_check_mismatch_message():
    with pytest.raises(BadConversion) as info:
        Variant(3).check(VariantType.STRING)
    assert str(info.value) == "Variant: bad conversion from 'int64' to 'string'"


def test_check_matching_type_passes_and_keeps_value():
    v = Variant(3, VariantType.INT32)
    v.check(VariantType.INT32)
    assert v.value == 3


@pytest.mark.parametrize("vtype", INT_TYPES)
def test_integer_string_round_trip(vtype):
    v = Variant(100, vtype)
    text = v.to(VariantType.STRING)
    assert Variant.from_string(text, vtype) == v


def test_unsigned_storage_wraps():
    assert Variant(-1, VariantType.UCHAR).value == 255


@pytest.mark.parametrize("vtype", INT_TYPES)
def test_integer_values_stay_in_range(vtype):
    low_value = Variant(-(2**70) - 3, vtype).value
    high_value = Variant(2**70 + 3, vtype).value
    for stored in (low_value, high_value):
        assert Variant(stored, vtype).value == stored


def test_from_string_out_of_range_raises():
    with pytest.raises(BadConversion):
        Variant.from_string("70000", VariantType.INT16)


def test_from_string_garbage_raises():
    with pytest.raises(BadConversion):
        Variant.from_string("abc", VariantType.DOUBLE)


@pytest.mark.parametrize("flag", [True, False])
def test_bool_string_round_trip(flag):
    text = Variant(flag).to(str)
    assert Variant.from_string(text, VariantType.BOOL).value is flag


def test_double_string_round_trip():
    v = Variant(0.1)
    assert Variant.from_string(v.to(str), VariantType.DOUBLE) == v


def test_float_is_single_precision_and_stable():
    stored = Variant(0.1, VariantType.FLOAT).value
    assert stored != 0.1
    assert Variant(stored, VariantType.FLOAT).value == stored
    assert Variant.from_string(Variant(stored, VariantType.FLOAT).to(str), VariantType.FLOAT).value == stored


def test_numeric_conversion():
    assert Variant(4).to(VariantType.DOUBLE) == 4.0
    assert Variant(2.9).to(int) == 2
    assert Variant(0).to(bool) is False


def test_string_to_number():
    assert Variant(" 42 ").to(VariantType.INT32) == 42


def test_none_cannot_convert():
    with pytest.raises(BadConversion):
        Variant().to(VariantType.INT32)


def test_nonfinite_float_to_int_raises():
    with pytest.raises(BadConversion):
        Variant(float("inf")).to(VariantType.INT32)


def test_object_values():
    payload = {"k": 1}
    v = Variant(payload, VariantType.SERIALIZABLE)
    assert v.to(VariantType.SERIALIZABLE) == payload
    with pytest.raises(BadConversion):
        v.to(VariantType.STRING)


def test_vector_to_int_raises():
    with pytest.raises(BadConversion):
        Variant([1, 2]).to(VariantType.INT32)


@pytest.mark.parametrize("vtype", list(VariantType))
def test_to_type_round_trip(vtype):
    assert Variant.to_type(Variant(type=vtype).type_name()) is vtype


def test_to_type_unknown():
    with pytest.raises(ValueError):
        Variant.to_type("quaternion")


def test_copy_constructor_is_independent():
    original = Variant([1, 2])
    duplicate = Variant(original)
    duplicate.value.append(Variant(3))
    assert original == [1, 2]
    assert duplicate == [1, 2, 3]


def test_equality_requires_same_type():
    assert Variant(1, VariantType.INT32) != Variant(1, VariantType.INT64)
    assert Variant(1, VariantType.INT32) == Variant(1, VariantType.INT32)


def test_store_wrong_python_value_raises():
    with pytest.raises(TypeError):
        Variant("x", VariantType.INT32)