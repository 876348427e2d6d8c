import math

import pytest

from muzak.devices.format import BufferSize, ChannelSpec, FormatInfo, SampleFormat
from muzak.devices.resample import (
    Resampler,
    convert_samples,
    match_bit_depth,
    sample_from,
    sample_into,
)
from muzak.media.playback import PlaybackFrame, SampleFormatError, Samples


def _target(rate, sample_type):
    return FormatInfo(
        originating_provider="dummy",
        sample_type=sample_type,
        sample_rate=rate,
        buffer_size=BufferSize.unknown(),
        channels=ChannelSpec(2),
        rate_channel_ratio=2,
        rate_channel_ratio_fixed=True,
    )


@pytest.mark.parametrize(
    "value, fmt, expected",
    [
        (32767, SampleFormat.SIGNED16, 1.0),
        (0, SampleFormat.SIGNED16, 0.0),
        (127, SampleFormat.SIGNED8, 1.0),
        (8388607, SampleFormat.SIGNED24, 1.0),
        (2147483647, SampleFormat.SIGNED32, 1.0),
        (0, SampleFormat.UNSIGNED16, -1.0),
        (127, SampleFormat.UNSIGNED8, 0.0),
        (8388607, SampleFormat.UNSIGNED24, 0.0),
        (0.25, SampleFormat.FLOAT32, 0.25),
    ],
)
def test_sample_into_fixed_points(value, fmt, expected):
    assert sample_into(value, fmt) == expected


@pytest.mark.parametrize(
    "value, fmt, expected",
    [
        (1.0, SampleFormat.SIGNED16, 32767),
        (0.0, SampleFormat.UNSIGNED8, 127),
        (0.0, SampleFormat.UNSIGNED16, 32767),
        (0.0, SampleFormat.UNSIGNED24, 8388607),
        (0.0, SampleFormat.UNSIGNED32, 2147483647),
        (-1.0, SampleFormat.UNSIGNED16, 0),
        (1.0, SampleFormat.SIGNED24, 8388607),
        (0.5, SampleFormat.FLOAT64, 0.5),
    ],
)
def test_sample_from_fixed_points(value, fmt, expected):
    assert sample_from(value, fmt) == expected


def test_sample_from_saturates_integer_formats():
    assert sample_from(4.0, SampleFormat.SIGNED8) == 127
    assert sample_from(-4.0, SampleFormat.SIGNED8) == -128
    assert sample_from(-3.0, SampleFormat.UNSIGNED8) == 0


def test_sample_from_nan_is_zero():
    assert sample_from(math.nan, SampleFormat.SIGNED16) == 0


def test_sample_from_float32_overflows_to_infinity():
    assert sample_from(1e300, SampleFormat.FLOAT32) == math.inf


@pytest.mark.parametrize(
    "value, fmt", [(2.0, SampleFormat.SIGNED24), (1.5, SampleFormat.UNSIGNED24)]
)
def test_sample_from_24_bit_out_of_bounds(value, fmt):
    with pytest.raises(ValueError, match="bounds"):
        sample_from(value, fmt)


def test_unconvertible_formats_raise():
    with pytest.raises(SampleFormatError):
        sample_into(1, SampleFormat.DSD)
    with pytest.raises(SampleFormatError):
        sample_from(0.0, SampleFormat.SIGNED24_PACKED)


@pytest.mark.parametrize(
    "fmt, values",
    [
        (SampleFormat.SIGNED16, [-32767, -100, 0, 99, 12345, 32767]),
        (SampleFormat.UNSIGNED8, [0, 1, 127, 200, 254]),
        (SampleFormat.SIGNED24, [-8388607, -5, 0, 77, 8388607]),
        (SampleFormat.UNSIGNED32, [0, 1000, 2147483647]),
    ],
)
def test_round_trip_through_float_stays_within_one_step(fmt, values):
    for value in values:
        assert abs(sample_from(sample_into(value, fmt), fmt) - value) <= 1


def test_convert_samples_to_float64():
    samples = Samples(SampleFormat.SIGNED16, [[0, 32767], [-32767, 0]])
    assert convert_samples(samples, SampleFormat.FLOAT64) == [[0.0, 1.0], [-1.0, 0.0]]


def test_convert_samples_rejects_dsd_and_unsupported():
    with pytest.raises(SampleFormatError):
        convert_samples(Samples(SampleFormat.DSD, [[True]]), SampleFormat.FLOAT32)
    with pytest.raises(SampleFormatError):
        convert_samples(Samples(SampleFormat.SIGNED16, [[0]]), SampleFormat.UNSUPPORTED)


def test_match_bit_depth_same_format_returns_frame():
    frame = PlaybackFrame(Samples(SampleFormat.SIGNED16, [[1, 2]]), 44100)
    assert match_bit_depth(frame, SampleFormat.SIGNED16) is frame


def test_match_bit_depth_converts_and_keeps_rate():
    frame = PlaybackFrame(Samples(SampleFormat.SIGNED16, [[32767, 0]]), 48000)
    result = match_bit_depth(frame, SampleFormat.FLOAT32)
    assert result.samples.is_format(SampleFormat.FLOAT32)
    assert result.samples.data == [[1.0, 0.0]]
    assert result.rate == 48000


def test_match_bit_depth_packed_target_stores_unpacked():
    frame = PlaybackFrame(Samples(SampleFormat.FLOAT32, [[1.0]]), 44100)
    result = match_bit_depth(frame, SampleFormat.SIGNED24_PACKED)
    assert result.samples.sample_format is SampleFormat.SIGNED24
    assert result.samples.data == [[8388607]]


def test_match_bit_depth_float64_target():
    frame = PlaybackFrame(Samples(SampleFormat.SIGNED16, [[0]]), 44100)
    result = match_bit_depth(frame, SampleFormat.FLOAT64)
    assert result.samples.data == [[0.0]]


@pytest.mark.parametrize("target", [SampleFormat.DSD, SampleFormat.UNSUPPORTED])
def test_match_bit_depth_rejects_targets(target):
    frame = PlaybackFrame(Samples(SampleFormat.SIGNED16, [[0]]), 44100)
    with pytest.raises(SampleFormatError):
        match_bit_depth(frame, target)


def test_resampler_same_rate_only_matches_depth():
    resampler = Resampler(44100, 48000, 4, 2)
    frame = PlaybackFrame(Samples(SampleFormat.SIGNED16, [[0, 1], [2, 3]]), 44100)
    result = resampler.convert_formats(frame, _target(44100, SampleFormat.SIGNED16))
    assert result is frame


def test_resampler_changes_rate_and_length():
    duration = 1024
    resampler = Resampler(44100, 22050, duration, 2)
    frame = PlaybackFrame(
        Samples(SampleFormat.FLOAT32, [[0.0] * duration, [0.0] * duration]), 44100
    )
    result = resampler.convert_formats(frame, _target(22050, SampleFormat.FLOAT32))
    assert result.rate == 22050
    assert len(result.samples.data) == 2
    assert len(result.samples.data[0]) == duration * 22050 // 44100
    assert all(value == 0.0 for channel in result.samples.data for value in channel)


def test_resampler_partial_block_has_full_length_and_target_type():
    resampler = Resampler(44100, 22050, 1024, 2)
    frame = PlaybackFrame(Samples(SampleFormat.SIGNED16, [[0] * 100, [0] * 100]), 44100)
    result = resampler.convert_formats(frame, _target(22050, SampleFormat.SIGNED16))
    assert result.samples.sample_format is SampleFormat.SIGNED16
    assert len(result.samples.data[0]) == resampler.output_frames


def test_resampler_output_stays_bounded():
    duration = 512
    resampler = Resampler(48000, 44100, duration, 1)
    signal = [math.sin(2 * math.pi * 440 * n / 48000) * 0.5 for n in range(duration)]
    frame = PlaybackFrame(Samples(SampleFormat.FLOAT64, [signal]), 48000)
    result = resampler.convert_formats(frame, _target(44100, SampleFormat.FLOAT64))
    assert max(abs(v) for v in result.samples.data[0]) < 1.0


def test_resampler_rejects_channel_mismatch():
    resampler = Resampler(44100, 22050, 16, 2)
    frame = PlaybackFrame(Samples(SampleFormat.FLOAT32, [[0.0] * 16]), 44100)
    with pytest.raises(ValueError, match="channels"):
        resampler.convert_formats(frame, _target(22050, SampleFormat.FLOAT32))


@pytest.mark.parametrize("args", [(0, 44100, 16, 2), (44100, 0, 16, 2), (44100, 48000, 0, 2), (44100, 48000, 16, 0)])
def test_resampler_rejects_invalid_arguments(args):
    with pytest.raises(ValueError):
        Resampler(*args)