"""Tests for header bit packing."""

import pytest

from twkb.errors import PrecisionOutOfRange, UnsupportedGeometryType
from twkb.geometry import GeometryKind
from twkb.header import (
    TwkbHeader,
    pack_extended_precision_byte,
    pack_metadata_byte,
    pack_type_byte,
    unpack_extended_precision_byte,
    unpack_metadata_byte,
    unpack_type_byte,
)


@pytest.mark.unit
class TestTypeByte:
    """Type code in the low nibble, zigzag precision in the high nibble."""

    def test_point_precision_zero(self):
        assert pack_type_byte(GeometryKind.POINT, 0) == 0x01

    def test_point_precision_five(self):
        # zigzag(5) == 10
        assert pack_type_byte(GeometryKind.POINT, 5) == 0xA1

    def test_negative_precision(self):
        assert pack_type_byte(GeometryKind.POLYGON, -1) == 0x13

    def test_precision_limits(self):
        assert pack_type_byte(GeometryKind.POINT, 7) == 0xE1
        assert pack_type_byte(GeometryKind.POINT, -8) == 0xF1

    @pytest.mark.parametrize("digits", [8, -9, 20])
    def test_precision_out_of_range(self, digits):
        with pytest.raises(PrecisionOutOfRange):
            pack_type_byte(GeometryKind.POINT, digits)

    def test_unpack(self):
        assert unpack_type_byte(0xA1) == (GeometryKind.POINT, 5)
        assert unpack_type_byte(0x13) == (GeometryKind.POLYGON, -1)
        assert unpack_type_byte(0x07) == (GeometryKind.GEOMETRYCOLLECTION, 0)

    @pytest.mark.parametrize("byte", [0x00, 0x08, 0x0F, 0xA9])
    def test_unknown_type_code(self, byte):
        with pytest.raises(UnsupportedGeometryType):
            unpack_type_byte(byte)

    def test_every_kind_roundtrips(self):
        for kind in GeometryKind:
            assert unpack_type_byte(pack_type_byte(kind, 3)) == (kind, 3)


@pytest.mark.unit
class TestMetadataByte:
    """Flag bits 0..4, reserved bits 5..7."""

    def test_default_is_zero(self):
        assert pack_metadata_byte() == 0x00

    def test_bbox_and_empty(self):
        assert pack_metadata_byte(has_bounding_box=True, is_empty=True) == 0x11

    def test_every_flag(self):
        byte = pack_metadata_byte(True, True, True, True, True)
        assert byte == 0x1F

    def test_unpack_flags(self):
        flags = unpack_metadata_byte(0x0A)
        assert flags["has_size"] is True
        assert flags["has_extended_precision"] is True
        assert flags["has_bounding_box"] is False
        assert flags["has_id_list"] is False
        assert flags["is_empty"] is False
        assert flags["reserved"] == (False, False, False)

    def test_unpack_reserved(self):
        flags = unpack_metadata_byte(0xA0)
        assert flags["reserved"] == (True, False, True)


@pytest.mark.unit
class TestExtendedPrecisionByte:
    """Z/M presence and 3-bit digit counts."""

    def test_z_only(self):
        byte = pack_extended_precision_byte(True, False, 2, 0)
        assert byte == 0x09
        assert not byte & 0x02
        assert (byte >> 2) & 0x07 == 2

    def test_z_and_m(self):
        assert pack_extended_precision_byte(True, True, 3, 4) == 0x8F

    def test_unpack(self):
        assert unpack_extended_precision_byte(0x8F) == {
            "has_z": True,
            "has_m": True,
            "z_precision": 3,
            "m_precision": 4,
        }

    @pytest.mark.parametrize("z,m", [(8, 0), (0, 8), (-1, 0), (0, -1)])
    def test_out_of_range(self, z, m):
        with pytest.raises(PrecisionOutOfRange):
            pack_extended_precision_byte(True, True, z, m)

    def test_max_digits(self):
        assert pack_extended_precision_byte(False, True, 7, 7) == 0xFE


@pytest.mark.unit
class TestTwkbHeader:

    def test_dimension(self):
        assert TwkbHeader(GeometryKind.POINT).dimension == 2
        assert TwkbHeader(GeometryKind.POINT, has_z=True).dimension == 3
        assert TwkbHeader(GeometryKind.POINT, has_z=True, has_m=True).dimension == 4
