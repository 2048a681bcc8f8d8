"""Music theory tables used by the guitar feature types.

Only what the feature factories need to validate their arguments and
resolve display data: note names, scale formulas, a small chord library,
Roman numeral progressions and triad formulas.
"""

from __future__ import annotations

from dataclasses import dataclass

# Enharmonic groups, A first; the first name of each group is canonical
MUSIC_NOTES: tuple[tuple[str, ...], ...] = (
    ("A",),
    ("A#", "Bb"),
    ("B",),
    ("C",),
    ("C#", "Db"),
    ("D",),
    ("D#", "Eb"),
    ("E",),
    ("F",),
    ("F#", "Gb"),
    ("G",),
    ("G#", "Ab"),
)

ALL_NOTE_NAMES: tuple[str, ...] = tuple(name for group in MUSIC_NOTES for name in group)


def get_key_index(note_name: str) -> int:
    """Return the 0-11 index of a note (A=0), or -1 when unknown."""
    for index, group in enumerate(MUSIC_NOTES):
        if note_name in group:
            return index
    return -1


def note_at(index: int) -> str:
    return MUSIC_NOTES[index % 12][0]


@dataclass(frozen=True)
class Scale:
    name: str
    intervals: tuple[int, ...]


SCALES: dict[str, Scale] = {
    "MAJOR": Scale("Major", (0, 2, 4, 5, 7, 9, 11)),
    "NATURAL_MINOR": Scale("Minor", (0, 2, 3, 5, 7, 8, 10)),
    "DORIAN": Scale("Dorian", (0, 2, 3, 5, 7, 9, 10)),
    "PHRYGIAN": Scale("Phrygian", (0, 1, 3, 5, 7, 8, 10)),
    "LYDIAN": Scale("Lydian", (0, 2, 4, 6, 7, 9, 11)),
    "MIXOLYDIAN": Scale("Mixolydian", (0, 2, 4, 5, 7, 9, 10)),
    "LOCRIAN": Scale("Locrian", (0, 1, 3, 5, 6, 8, 10)),
    "MAJOR_PENTATONIC": Scale("Major Pentatonic", (0, 2, 4, 7, 9)),
    "MINOR_PENTATONIC": Scale("Minor Pentatonic", (0, 3, 5, 7, 10)),
    "MINOR_BLUES": Scale("Minor Blues", (0, 3, 5, 6, 7, 10)),
    "MAJOR_BLUES": Scale("Major Blues", (0, 2, 3, 4, 7, 9)),
    "HARMONIC_MINOR": Scale("Harmonic Minor", (0, 2, 3, 5, 7, 8, 11)),
    "MELODIC_MINOR": Scale("Melodic Minor", (0, 2, 3, 5, 7, 9, 11)),
    "PHRYGIAN_DOMINANT": Scale("Phrygian Dominant", (0, 1, 4, 5, 7, 8, 10)),
    "WHOLE_TONE": Scale("Whole Tone", (0, 2, 4, 6, 8, 10)),
    "DIMINISHED_WH": Scale("Diminished (W-H)", (0, 2, 3, 5, 6, 8, 9, 11)),
    "DIMINISHED_HW": Scale("Diminished (H-W)", (0, 1, 3, 4, 6, 7, 9, 10)),
    "LYDIAN_DOMINANT": Scale("Lydian Dominant", (0, 2, 4, 6, 7, 9, 10)),
}

SCALE_ALIASES: dict[str, str] = {
    "Blues": "MINOR_BLUES",
    "Minor Blues": "MINOR_BLUES",
    "Major Blues": "MAJOR_BLUES",
    "Natural Minor": "NATURAL_MINOR",
    "Minor": "NATURAL_MINOR",
    "Major": "MAJOR",
    "Ionian": "MAJOR",
    "Aeolian": "NATURAL_MINOR",
    "Spanish Minor": "PHRYGIAN",
    "Dominant 7th": "MIXOLYDIAN",
    "Half-Diminished": "LOCRIAN",
    "Major Pentatonic": "MAJOR_PENTATONIC",
    "Minor Pentatonic": "MINOR_PENTATONIC",
    "Pentatonic Minor": "MINOR_PENTATONIC",
    "Pentatonic Major": "MAJOR_PENTATONIC",
    "Harmonic Minor": "HARMONIC_MINOR",
    "Melodic Minor": "MELODIC_MINOR",
    "Jazz Minor": "MELODIC_MINOR",
    "Phrygian Dominant": "PHRYGIAN_DOMINANT",
    "Whole Tone": "WHOLE_TONE",
    "Diminished WH": "DIMINISHED_WH",
    "Diminished HW": "DIMINISHED_HW",
    "Lydian Dominant": "LYDIAN_DOMINANT",
    "Lydian b7": "LYDIAN_DOMINANT",
}


def available_scale_names() -> list[str]:
    """Scale keys plus aliases, de-duplicated in declaration order."""
    return list(dict.fromkeys([*SCALES.keys(), *SCALE_ALIASES.keys()]))


def resolve_scale(name: str) -> Scale | None:
    return SCALES.get(SCALE_ALIASES.get(name, name))


def scale_notes(root: str, scale: Scale) -> list[str]:
    """Notes of ``scale`` starting at ``root``.

    Raises:
        ValueError: If the root note is unknown.
    """
    root_index = get_key_index(root)
    if root_index == -1:
        raise ValueError(f'Unknown key: "{root}"')
    return [note_at(root_index + step) for step in scale.intervals]


# Chord quality -> semitone formula
CHORD_FORMULAS: dict[str, tuple[int, ...]] = {
    "MAJOR": (0, 4, 7),
    "MINOR": (0, 3, 7),
    "DIM": (0, 3, 6),
    "AUG": (0, 4, 8),
    "7": (0, 4, 7, 10),
    "MAJ7": (0, 4, 7, 11),
    "M7": (0, 3, 7, 10),
    "SUS2": (0, 2, 7),
    "SUS4": (0, 5, 7),
}

# Library key -> (root, quality)
CHORD_LIBRARY: dict[str, tuple[str, str]] = {
    "A_MAJOR": ("A", "MAJOR"),
    "B_MAJOR": ("B", "MAJOR"),
    "C_MAJOR": ("C", "MAJOR"),
    "D_MAJOR": ("D", "MAJOR"),
    "E_MAJOR": ("E", "MAJOR"),
    "F_MAJOR": ("F", "MAJOR"),
    "G_MAJOR": ("G", "MAJOR"),
    "A_MINOR": ("A", "MINOR"),
    "B_MINOR": ("B", "MINOR"),
    "D_MINOR": ("D", "MINOR"),
    "E_MINOR": ("E", "MINOR"),
    "A7": ("A", "7"),
    "B7": ("B", "7"),
    "C7": ("C", "7"),
    "D7": ("D", "7"),
    "E7": ("E", "7"),
    "F7": ("F", "7"),
    "G7": ("G", "7"),
    "AMAJ7": ("A", "MAJ7"),
    "CMAJ7": ("C", "MAJ7"),
    "DMAJ7": ("D", "MAJ7"),
    "FMAJ7": ("F", "MAJ7"),
    "GMAJ7": ("G", "MAJ7"),
    "AM7": ("A", "M7"),
    "BM7": ("B", "M7"),
    "CM7": ("C", "M7"),
    "DM7": ("D", "M7"),
    "EM7": ("E", "M7"),
    "GM7": ("G", "M7"),
    "ASUS2": ("A", "SUS2"),
    "ASUS4": ("A", "SUS4"),
    "DSUS2": ("D", "SUS2"),
    "DSUS4": ("D", "SUS4"),
    "ESUS4": ("E", "SUS4"),
}


def chord_notes(chord_key: str) -> list[str]:
    """Notes of a library chord.

    Raises:
        KeyError: If the chord is not in the library.
    """
    root, quality = CHORD_LIBRARY[chord_key]
    root_index = get_key_index(root)
    return [note_at(root_index + step) for step in CHORD_FORMULAS[quality]]


PROGRESSION_NUMERALS: tuple[str, ...] = ("I", "ii", "iii", "IV", "V", "vi", "vii°")

# Major-key Roman numeral -> (degree in semitones, chord quality)
MAJOR_KEY_ROMAN_MAP: dict[str, tuple[int, str]] = {
    "I": (0, "MAJOR"),
    "ii": (2, "MINOR"),
    "iii": (4, "MINOR"),
    "IV": (5, "MAJOR"),
    "V": (7, "MAJOR"),
    "vi": (9, "MINOR"),
    "vii°": (11, "DIM"),
}

_QUALITY_SUFFIX = {"MAJOR": "", "MINOR": "m", "DIM": "dim"}


def chord_name_in_key(root: str, numeral: str) -> str:
    """Chord name for a Roman numeral in a major key (e.g. ``vi`` in C -> ``Am``).

    Raises:
        ValueError: If the key or numeral is unknown.
    """
    root_index = get_key_index(root)
    if root_index == -1:
        raise ValueError(f'Unknown key: "{root}"')
    if numeral not in MAJOR_KEY_ROMAN_MAP:
        raise ValueError(f'Unknown numeral: "{numeral}"')
    degree, quality = MAJOR_KEY_ROMAN_MAP[numeral]
    return note_at(root_index + degree) + _QUALITY_SUFFIX[quality]


TRIAD_QUALITIES: tuple[str, ...] = ("Major", "Minor")
TRIAD_INTERVALS: dict[str, tuple[int, int, int]] = {
    "Major": (0, 4, 7),
    "Minor": (0, 3, 7),
}
TRIAD_INVERSIONS: tuple[str, ...] = ("Root", "1st", "2nd", "All")


def triad_notes(root: str, quality: str, inversion: str) -> list[str]:
    """Triad notes ordered for the inversion ("All" keeps root position).

    Raises:
        ValueError: If the root, quality or inversion is unknown.
    """
    root_index = get_key_index(root)
    if root_index == -1:
        raise ValueError(f'Unknown key: "{root}"')
    if quality not in TRIAD_INTERVALS:
        raise ValueError(f'Unknown triad quality: "{quality}"')
    if inversion not in TRIAD_INVERSIONS:
        raise ValueError(f'Unknown inversion: "{inversion}"')
    notes = [note_at(root_index + step) for step in TRIAD_INTERVALS[quality]]
    rotate = {"1st": 1, "2nd": 2}.get(inversion, 0)
    return notes[rotate:] + notes[:rotate]


CAGED_SCALE_TYPES: tuple[str, ...] = ("Major", "Major Pentatonic", "Minor", "Minor Pentatonic")
CAGED_LABEL_OPTIONS: tuple[str, ...] = ("Interval", "Note Name")
CAGED_SHAPES: tuple[str, ...] = ("C", "A", "G", "E", "D")
