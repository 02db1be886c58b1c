import pytest

from brepkit.converters import QuaternionConverter, XYZConverter
from brepkit.math_utils import XYZ, Quaternion, deg_to_rad


def test_quaternion_converter_round_trip():
    converter = QuaternionConverter()
    q = Quaternion.from_euler(deg_to_rad(30), deg_to_rad(45), deg_to_rad(60))
    text = converter.convert(q)
    assert text.is_ok
    parts = [float(p) for p in text.value.split(",")]
    assert parts == pytest.approx([30.0, 45.0, 60.0])

    back = converter.convert_back(text.value)
    assert back.is_ok
    assert back.value.is_equal_to(q)


def test_quaternion_converter_parses_degrees():
    back = QuaternionConverter().convert_back("0, 0, 90")
    assert back.is_ok
    assert back.value.is_equal_to(Quaternion.from_euler(0, 0, deg_to_rad(90)))


@pytest.mark.parametrize("text", ["not,a,b", "1,2", "", "1,2,3,4", "1,x,3", "1,2,3,"])
def test_quaternion_converter_rejects_bad_text(text):
    result = QuaternionConverter().convert_back(text)
    assert not result.is_ok
    assert result.error == f"{text} convert to Quaternion error"


def test_xyz_converter():
    converter = XYZConverter()
    assert converter.convert(XYZ(1, 2.5, -3)).value == "1.0,2.5,-3.0"
    assert converter.convert_back("1,2.5,-3").value == XYZ(1, 2.5, -3)
    assert not converter.convert_back("1,2").is_ok


def test_blank_fields_count_as_zero():
    back = QuaternionConverter().convert_back("0,,90")
    assert back.is_ok
    assert back.value.is_equal_to(Quaternion.from_euler(0, 0, deg_to_rad(90)))
    assert XYZConverter().convert_back("1,,3").value == XYZ(1, 0, 3)
    assert XYZConverter().convert_back(" ,2, ").value == XYZ(0, 2, 0)
    assert not XYZConverter().convert_back("1,2,3,").is_ok
