# muzak

Building blocks for a desktop music player: sample formats and sample
conversion, audio device and media provider interfaces, track metadata,
music library records, library file discovery and the commands sent to a
background image and metadata worker.

## Installation

```
pip install .
```

To run the test suite, install the test extra:

```
pip install ".[test]"
pytest
```

## Modules

- `muzak.devices.format`: `SampleFormat`, the `Channels` speaker bitmask,
  `ChannelSpec` (a bitmask or a plain count), `BufferSize` (`fixed`, `range`,
  `unknown`), `FormatInfo`, `SupportedFormat` and speaker `Layout`s such as
  `Layout.STEREO` and `Layout.FIVE_ONE`.
- `muzak.devices.errors`: `DeviceError` and its subclasses (`FindError`,
  `InfoError`, `OpenError` and others), each carrying a `DeviceErrorReason`
  and, for unknown errors, a detail message.
- `muzak.devices.resample`: `sample_into` and `sample_from` convert single
  samples to and from floats; `convert_samples` and `match_bit_depth` convert
  whole blocks between bit depths. `Resampler` changes the sample rate of
  fixed-size blocks (shorter blocks are padded with silence, longer ones are
  cut) using polyphase filtering.
- `muzak.devices.util`: `interleave` per-channel data into frame order,
  `pack` samples into native-endian bytes, and `scale` them by a volume factor
  with clamping.
- `muzak.devices.traits`: the abstract `DeviceProvider`, `Device` and
  `OutputStream` interfaces for audio back ends.
- `muzak.devices.dummy`: `DummyDeviceProvider`, `DummyDevice` and
  `DummyStream`, a back end that accepts frames and plays nothing. Its format
  comes from `MUZAK_DUMMY_SAMPLE_RATE` (default 44100),
  `MUZAK_DUMMY_BIT_FORMAT` (default `S16`), `MUZAK_DUMMY_CHANNELS` (default 2)
  and `MUZAK_DUMMY_BUFFER_SIZE` (default 4096), or from a mapping passed as
  `environ`.
- `muzak.media.playback`: `Samples`, `PlaybackFrame`, `muted` and
  `SampleFormatError`.
- `muzak.media.metadata`: the `Metadata` dataclass of track tags.
- `muzak.media.errors`: `MediaError` and its subclasses, each carrying a
  `MediaErrorReason`.
- `muzak.media.traits`: the abstract `MediaProvider` interface and
  `MediaPlugin`, which checks that a plugin class declares its name, version,
  mime-types, extensions and capability flags.
- `muzak.library.types`: `Artist`, `Album` and `Track` records,
  `AlbumSortMethod`, `AlbumMethod` and `album_sort_method`, which maps a table
  column and direction to an album ordering. `Album.column` gives the text of
  each table column and `Album.with_method` keeps only the wanted artwork.
- `muzak.library.scan`: `ScanRecord` remembers file modification times in a
  JSON file (`load`, `save`, `file_is_scannable`, `stale_paths`, `forget`);
  `FileDiscovery` walks directory trees and collects new or changed files with
  a matching extension, yielding `DiscoverProgress` every twenty files. The
  `ScanEvent` classes and `ScanState` describe scanner progress.
- `muzak.data.events`: the `DecodeImage`, `EvictQueueCache` and
  `ReadMetadata` commands, with `ImageType`, `ImageKind` and `ImageLayout`.

## Example

```python
from muzak.devices.format import SampleFormat
from muzak.devices.resample import match_bit_depth
from muzak.media.playback import PlaybackFrame, Samples

frame = PlaybackFrame(samples=Samples(SampleFormat.SIGNED16, [[0, 16384], [0, -16384]]), rate=44100)
converted = match_bit_depth(frame, SampleFormat.FLOAT32)
print(converted.samples.unwrap(SampleFormat.FLOAT32))
```

## What this package does not do

- It plays no audio: the only device back end is the silent dummy one.
- It decodes no media files and reads no tags from them; `MediaProvider` is
  an interface with no implementation here.
- It has no library database: `Artist`, `Album` and `Track` are plain records,
  and nothing stores or queries them.
- Scanning stops at finding files: nothing reads their metadata or indexes
  them, and no worker runs the commands in `muzak.data.events`.
- There is no user interface and no command to run.