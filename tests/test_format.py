import dataclasses
import functools
import operator

import pytest

from muzak.devices.format import (
    BufferSize,
    ChannelSpec,
    Channels,
    FormatInfo,
    Layout,
    SampleFormat,
    SupportedFormat,
)


def test_layout_masks_match_source_bits():
    assert Layout.STEREO.channels() == Channels(0x3)
    assert Layout.SEVEN_ONE.channels() == Channels(0x63B)
    assert Channels(0x20000) == Channels.TOP_BACK_RIGHT


@pytest.mark.parametrize("member", list(Channels))
def test_every_channel_is_a_single_bit(member):
    assert ChannelSpec(member).count() == 1


def test_empty_mask_has_no_channels():
    assert Channels(0).count() == 0


def test_mask_count_equals_number_of_members():
    members = [Channels.FRONT_LEFT, Channels.BACK_CENTER, Channels.TOP_BACK_RIGHT, Channels.SIDE_LEFT]
    mask = functools.reduce(operator.or_, members)
    assert ChannelSpec(mask).count() == len(members)
    assert Channels(0x1 | 0x100 | 0x20000 | 0x200).count() == 4


def test_stereo_layout():
    assert Layout.STEREO.channels() == Channels.FRONT_LEFT | Channels.FRONT_RIGHT


def test_five_one_layout():
    expected = (
        Channels.FRONT_LEFT
        | Channels.FRONT_RIGHT
        | Channels.BACK_LEFT
        | Channels.BACK_RIGHT
        | Channels.LOW_FREQUENCY
    )
    assert Layout.FIVE_ONE.channels() == expected


def test_seven_one_contains_five_one():
    five = Layout.FIVE_ONE.channels()
    seven = Layout.SEVEN_ONE.channels()
    assert seven & five == five
    assert seven & ~five == Channels.SIDE_LEFT | Channels.SIDE_RIGHT


@pytest.mark.parametrize("layout", list(Layout))
def test_bitmask_spec_counts_layout(layout):
    spec = ChannelSpec(layout.channels())
    assert spec.is_bitmask
    assert spec.count() == layout.channels().count()


def test_count_spec_returns_count():
    assert ChannelSpec(6).count() == 6


def test_bitmask_and_count_specs_differ():
    mask = ChannelSpec(Channels.FRONT_LEFT | Channels.FRONT_RIGHT)
    count = ChannelSpec(3)
    assert mask.is_bitmask and not count.is_bitmask
    assert mask != count
    assert ChannelSpec(4) == ChannelSpec(4)
    assert hash(ChannelSpec(4)) == hash(ChannelSpec(4))


def test_channel_count_must_fit_u16():
    with pytest.raises(ValueError):
        ChannelSpec(70000)
    with pytest.raises(ValueError):
        ChannelSpec(-1)


def test_channel_spec_rejects_non_integers():
    with pytest.raises(TypeError):
        ChannelSpec("2")


def test_buffer_size_variants():
    fixed = BufferSize.fixed(4096)
    ranged = BufferSize.range(128, 8192)
    unknown = BufferSize.unknown()
    assert fixed.fixed_size == 4096 and fixed.sizes is None
    assert ranged.sizes == range(128, 8192) and ranged.fixed_size is None
    assert unknown.is_unknown
    assert not fixed.is_unknown
    assert BufferSize.fixed(4096) == fixed


def test_buffer_size_rejects_negative():
    with pytest.raises(ValueError):
        BufferSize.fixed(-1)
    with pytest.raises(ValueError):
        BufferSize.range(-5, 10)


def test_buffer_size_cannot_be_both():
    with pytest.raises(ValueError):
        BufferSize(sizes=range(1, 2), fixed_size=3)


def _format(**overrides):
    base = FormatInfo(
        originating_provider="dummy",
        sample_type=SampleFormat.SIGNED16,
        sample_rate=44100,
        buffer_size=BufferSize.fixed(4096),
        channels=ChannelSpec(2),
        rate_channel_ratio=2,
        rate_channel_ratio_fixed=True,
    )
    return dataclasses.replace(base, **overrides)


def test_format_info_equality_and_replace():
    assert _format() == _format()
    changed = _format(sample_rate=48000)
    assert changed.sample_rate == 48000
    assert changed != _format()
    assert changed.channels.count() == _format().channels.count()


def test_supported_format_holds_rate_range():
    supported = SupportedFormat(
        originating_provider="dummy",
        sample_type=SampleFormat.FLOAT32,
        sample_rates=range(44100, 48000),
        buffer_size=BufferSize.unknown(),
        channels=ChannelSpec(Layout.STEREO.channels()),
    )
    assert 44100 in supported.sample_rates
    assert 48000 not in supported.sample_rates
    assert supported.channels.count() == Layout.STEREO.channels().count()