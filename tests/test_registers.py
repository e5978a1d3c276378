import pytest

from sc8815.registers import (
    BatteryStatusFlags,
    Ctrl0Flags,
    Ctrl1Flags,
    Ctrl2Flags,
    Ctrl3Flags,
    InputSourceStatusFlags,
    MaskFlags,
    RatioFlags,
    Register,
    StatusFlags,
    ThermalStatusFlags,
    VbatSetFlags,
    truncate,
)

ALL_FLAG_TYPES = [
    StatusFlags,
    MaskFlags,
    Ctrl0Flags,
    Ctrl1Flags,
    Ctrl2Flags,
    Ctrl3Flags,
    RatioFlags,
    VbatSetFlags,
    BatteryStatusFlags,
    InputSourceStatusFlags,
    ThermalStatusFlags,
]


def test_register_lookup_by_wire_address():
    assert Register(0x17) is Register.STATUS
    assert Register(0x0B) is Register.CTRL2_SET
    assert Register(0x19) is Register.MASK


def test_register_addresses_are_unique_and_contiguous():
    looked_up = [Register(address) for address in range(0x1C)]
    assert [int(reg) for reg in looked_up] == list(range(0x1C))
    assert len(set(looked_up)) == 0x1C
    assert Register(0x1B) is Register.THERMAL_STATUS
    assert Register(0x00) is Register.VBAT_SET


def test_register_rejects_unknown_address():
    with pytest.raises(ValueError):
        Register(0x7F)


def test_truncate_status_decodes_bits():
    flags = truncate(StatusFlags, 0x42)
    assert StatusFlags.EOC in flags
    assert StatusFlags.AC_OK in flags
    assert StatusFlags.OTP not in flags
    assert StatusFlags.INDET not in flags


@pytest.mark.parametrize("flag_type", ALL_FLAG_TYPES)
def test_truncate_drops_bits_beyond_byte(flag_type):
    flags = truncate(flag_type, 0x100 | 0x42)
    assert int(flags) == 0x42
    assert isinstance(flags, flag_type)


@pytest.mark.parametrize("flag_type", ALL_FLAG_TYPES)
def test_truncate_roundtrips_every_byte(flag_type):
    for value in range(256):
        assert int(truncate(flag_type, value)) == value


def test_mask_flags_insert_and_remove():
    mask = truncate(MaskFlags, 0x00) | MaskFlags.RESERVED_0
    assert int(mask) == 0x01
    full = truncate(MaskFlags, 0xFF)
    reduced = full & ~MaskFlags.AC_OK_MASK
    assert MaskFlags.AC_OK_MASK not in reduced
    assert int(reduced | MaskFlags.AC_OK_MASK) == int(full)


def test_ctrl0_field_masks_cover_frequency_and_dead_time():
    ctrl0 = truncate(Ctrl0Flags, 0x80 | (0x03 << 2) | 0x01)
    assert Ctrl0Flags.EN_OTG in ctrl0
    assert (int(ctrl0) & Ctrl0Flags.FREQ_SET_MASK) >> 2 == 0x03
    assert int(ctrl0) & Ctrl0Flags.DT_SET_MASK == 0x01


def test_ctrl2_factory_bit_set_on_zero_register():
    ctrl2 = truncate(Ctrl2Flags, 0x00) | Ctrl2Flags.FACTORY
    assert int(ctrl2) == 0x08