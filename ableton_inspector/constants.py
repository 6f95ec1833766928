"""
Constants for the Ableton Live Set inspector.

This module centralizes the magic values of the .als format and the
defaults every extractor falls back to when data is missing.
"""


class ExtractionDefaults:
    """Values reported when a project does not carry the data."""

    DEFAULT_TEMPO = 120.0
    DEFAULT_NUMERATOR = 4
    DEFAULT_DENOMINATOR = 4
    DEFAULT_TRACK_COLOR = 0
    DEFAULT_SECTIONS = ("tempo", "scale", "samples")


class FormatConstants:
    """Identifiers with a fixed meaning in Ableton's XML dialect."""

    # PointeeId of the automation envelope driving the song tempo
    TEMPO_POINTEE_ID = 8

    # FloatEvent time meaning "value at project start" (-2 years in seconds)
    INITIAL_TEMPO_TIME = -63072000

    # Quarter-note beats per bar for locator durations
    BEATS_PER_BAR = 4

    # Max depth of the fallback search for a device name
    DEVICE_NAME_SEARCH_DEPTH = 10

    # The pre-hear track only counts as the master when it carries this name
    MASTER_TRACK_NAME = "Master"
    MASTER_TRACK_ID = 0


# Every extractable section, in report order
ALL_SECTIONS = (
    "tempo",
    "scale",
    "samples",
    "locators",
    "time_signature",
    "track_types",
    "devices",
)

# Note names (0-11) matching Ableton's display
NOTE_NAMES = [
    "C",
    "C#/Db",
    "D",
    "D#/Eb",
    "E",
    "F",
    "F#/Gb",
    "G",
    "G#/Ab",
    "A",
    "A#/Bb",
    "B",
]

# Scale types (0-34) in the order Live 12 stores them
SCALE_NAMES = [
    "Major",
    "Minor",
    "Dorian",
    "Mixolydian",
    "Lydian",
    "Phrygian",
    "Locrian",
    "Whole Tone",
    "Half-whole Dim.",
    "Whole-half Dim.",
    "Minor Blues",
    "Minor Pentatonic",
    "Major Pentatonic",
    "Harmonic Minor",
    "Harmonic Major",
    "Dorian #4",
    "Phrygian Dominant",
    "Melodic Minor",
    "Lydian Augmented",
    "Lydian Dominant",
    "Super Locrian",
    "8-Tone Spanish",
    "Bhairav",
    "Hungarian Minor",
    "Hirajoshi",
    "In-Sen",
    "Iwato",
    "Kumoi",
    "Pelog Selisir",
    "Pelog Tembung",
    "Messiaen 3",
    "Messiaen 4",
    "Messiaen 5",
    "Messiaen 6",
    "Messiaen 7",
]

# Default Splice install locations (macOS/Linux and Windows)
DEFAULT_SPLICE_PATTERNS = [
    "/splice/sounds/packs/",
    "/splice/plugins/",
    "\\splice\\sounds\\packs\\",
    "\\splice\\plugins\\",
]

AUDIO_EXTENSIONS = (".wav", ".aif", ".aiff", ".mp3", ".flac", ".ogg", ".m4a", ".aac")

# Presets, racks, Max devices and sets are referenced through FileRef too
DEVICE_FILE_EXTENSIONS = (".adv", ".adg", ".amxd", ".als")

# FileRef paths Live writes for built-in devices
BUILTIN_DEVICE_NAMES = ("Tuner", "External Instrument")

# Container tag -> human readable category
DEVICE_CATEGORIES = {
    "PluginDevice": "Plugin",
    "MidiDevice": "MIDI Device",
    "AudioEffectGroupDevice": "Audio Effect Group",
    "AudioEffectRackDevice": "Audio Effect Rack",
    "MidiEffectGroupDevice": "MIDI Effect Group",
    "MidiEffectRackDevice": "MIDI Effect Rack",
    "InstrumentGroupDevice": "Instrument Group",
    "InstrumentRackDevice": "Instrument Rack",
    "MaxAudioEffectDevice": "Max Audio Effect",
    "MaxMidiEffectDevice": "Max MIDI Effect",
    "MaxInstrumentDevice": "Max Instrument",
}

DEVICE_CONTAINER_TAGS = tuple(DEVICE_CATEGORIES)
