"""Guitar feature types: schemas and factories.

Each factory validates its positional args, resolves the music theory data
the runtime needs and returns a ``GuitarFeature``. Rendering is left to the
runtime that executes the built schedule.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from practempo.core.categories.guitar import theory
from practempo.core.categories.guitar.settings import GuitarIntervalSettings
from practempo.core.errors import FeatureConfigError
from practempo.core.features.descriptor import FeatureContext, FeatureTypeDescriptor
from practempo.core.features.schema import ArgSpec, ArgType, ConfigurationSchema, UIComponent

logger = logging.getLogger(__name__)

CATEGORY_NAME = "Guitar"

GUITAR_SETTINGS_ARG = ArgSpec(
    name="Guitar Settings",
    type=ArgType.ELLIPSIS,
    ui_component=UIComponent.ELLIPSIS,
    description="Configure interval-specific guitar settings (Metronome).",
    nested_schema=(
        ArgSpec(name="metronomeBpm", type=ArgType.NUMBER, description="Metronome BPM (0=off)"),
    ),
)


@dataclass(frozen=True)
class GuitarFeature:
    """A configured guitar exercise.

    Attributes:
        type_name: Feature type name.
        config: Positional args the feature was created from.
        title: Header text shown while the interval runs.
        notes: Notes to highlight, when the feature has a note set.
        chords: Chord names (or library keys) to display.
        metronome_bpm: Tempo from the interval settings; 0 means off.
        options: Remaining feature-specific options.
    """

    type_name: str
    config: tuple[str, ...]
    title: str = ""
    notes: tuple[str, ...] = ()
    chords: tuple[str, ...] = ()
    metronome_bpm: int = 0
    options: dict[str, str] = field(default_factory=dict)
    category: str = CATEGORY_NAME

    @property
    def header_text(self) -> str:
        return self.title or self.type_name


def _bpm(context: FeatureContext) -> int:
    settings = context.interval_settings
    if isinstance(settings, GuitarIntervalSettings):
        return settings.metronome_bpm
    return 0


def _require(args: tuple[str, ...], count: int, type_name: str, expected: str) -> None:
    if len(args) < count or any(not a for a in args[:count]):
        raise FeatureConfigError(
            f"Invalid config for {type_name}. Expected {expected}, received: [{', '.join(args)}]"
        )


def _canonical_key(name: str) -> str:
    index = theory.get_key_index(name)
    if index == -1:
        raise FeatureConfigError(f'Unknown key: "{name}"')
    return theory.note_at(index)


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------

NOTES_TYPE = "Notes"


def create_notes_feature(args: tuple[str, ...], context: FeatureContext) -> GuitarFeature:
    root = args[0] if args and args[0] not in ("", "None") else None
    if root is None:
        return GuitarFeature(
            type_name=NOTES_TYPE,
            config=args,
            title="Fretboard Notes",
            notes=tuple(g[0] for g in theory.MUSIC_NOTES),
            metronome_bpm=_bpm(context),
        )
    key = _canonical_key(root)
    return GuitarFeature(
        type_name=NOTES_TYPE,
        config=args,
        title=f"Notes: {key}",
        notes=(key,),
        metronome_bpm=_bpm(context),
    )


NOTES_DESCRIPTOR = FeatureTypeDescriptor(
    category=CATEGORY_NAME,
    type_name=NOTES_TYPE,
    display_name="Fretboard Notes",
    description="Shows every note on the fretboard, optionally highlighting one.",
    schema=ConfigurationSchema(
        description=f"Config: {NOTES_TYPE}[,RootNote][,GuitarSettings]",
        args=(
            ArgSpec(
                name="RootNote",
                type=ArgType.ENUM,
                enum_values=("None", *theory.ALL_NOTE_NAMES),
                description="Optional note to highlight.",
            ),
            GUITAR_SETTINGS_ARG,
        ),
    ),
    factory=create_notes_feature,
)

# ---------------------------------------------------------------------------
# Scale
# ---------------------------------------------------------------------------

SCALE_TYPE = "Scale"


def create_scale_feature(args: tuple[str, ...], context: FeatureContext) -> GuitarFeature:
    _require(args, 2, SCALE_TYPE, "at least [ScaleName, Key]")
    scale = theory.resolve_scale(args[0])
    if scale is None:
        raise FeatureConfigError(f'Unknown scale: "{args[0]}"')
    key = _canonical_key(args[1])
    return GuitarFeature(
        type_name=SCALE_TYPE,
        config=args,
        title=f"{key} {scale.name}",
        notes=tuple(theory.scale_notes(key, scale)),
        metronome_bpm=_bpm(context),
    )


SCALE_DESCRIPTOR = FeatureTypeDescriptor(
    category=CATEGORY_NAME,
    type_name=SCALE_TYPE,
    display_name="Scale Diagram",
    description="Shows a scale across the fretboard.",
    schema=ConfigurationSchema(
        description=f"Config: {SCALE_TYPE},ScaleName,Key[,GuitarSettings]",
        args=(
            ArgSpec(
                name="ScaleName",
                type=ArgType.ENUM,
                required=True,
                enum_values=tuple(theory.available_scale_names()),
                description="Name of the scale.",
            ),
            ArgSpec(
                name="Key",
                type=ArgType.ENUM,
                required=True,
                enum_values=theory.ALL_NOTE_NAMES,
                description="Root note of the scale.",
            ),
            GUITAR_SETTINGS_ARG,
        ),
    ),
    factory=create_scale_feature,
)

# ---------------------------------------------------------------------------
# Chord
# ---------------------------------------------------------------------------

CHORD_TYPE = "Chord"


def create_chord_feature(args: tuple[str, ...], context: FeatureContext) -> GuitarFeature:
    chord_keys = tuple(a for a in args if a)
    if not chord_keys:
        raise FeatureConfigError(
            f"Invalid config for {CHORD_TYPE}. Expected at least one ChordName."
        )
    unknown = [k for k in chord_keys if k not in theory.CHORD_LIBRARY]
    if unknown:
        raise FeatureConfigError(f'Unknown chord: "{unknown[0]}"')
    notes = dict.fromkeys(n for k in chord_keys for n in theory.chord_notes(k))
    return GuitarFeature(
        type_name=CHORD_TYPE,
        config=args,
        title=", ".join(chord_keys),
        notes=tuple(notes),
        chords=chord_keys,
        metronome_bpm=_bpm(context),
    )


CHORD_DESCRIPTOR = FeatureTypeDescriptor(
    category=CATEGORY_NAME,
    type_name=CHORD_TYPE,
    display_name="Chord Diagram",
    description="Shows one or more chord diagrams.",
    schema=ConfigurationSchema(
        description=f"Config: {CHORD_TYPE},ChordName1[,ChordName2,...][,GuitarSettings]",
        args=(
            ArgSpec(
                name="ChordNames",
                type=ArgType.ENUM,
                required=True,
                enum_values=tuple(theory.CHORD_LIBRARY),
                is_variadic=True,
                description="One or more chord names.",
            ),
            GUITAR_SETTINGS_ARG,
        ),
    ),
    factory=create_chord_feature,
)

# ---------------------------------------------------------------------------
# Chord Progression
# ---------------------------------------------------------------------------

PROGRESSION_TYPE = "Chord Progression"


def create_progression_feature(args: tuple[str, ...], context: FeatureContext) -> GuitarFeature:
    _require(args, 1, PROGRESSION_TYPE, "[RootNote, Numeral1, ...]")
    key = _canonical_key(args[0])
    numerals = [n for n in args[1:] if n]
    # Legacy single token "I-vi-IV-V"
    if len(numerals) == 1 and "-" in numerals[0]:
        numerals = [n for n in numerals[0].split("-") if n]
    if not numerals:
        raise FeatureConfigError("Progression cannot be empty.")
    try:
        chords = tuple(theory.chord_name_in_key(key, n) for n in numerals)
    except ValueError as e:
        raise FeatureConfigError(str(e)) from e
    return GuitarFeature(
        type_name=PROGRESSION_TYPE,
        config=args,
        title=f"{'-'.join(numerals)} Progression in {key}",
        chords=chords,
        metronome_bpm=_bpm(context),
    )


PROGRESSION_DESCRIPTOR = FeatureTypeDescriptor(
    category=CATEGORY_NAME,
    type_name=PROGRESSION_TYPE,
    display_name="Chord Progression",
    description="Shows the chords of a Roman numeral progression in a key.",
    schema=ConfigurationSchema(
        description=f"Config: {PROGRESSION_TYPE},RootNote,ProgressionSequence...[,GuitarSettings]",
        args=(
            ArgSpec(
                name="RootNote",
                type=ArgType.ENUM,
                required=True,
                enum_values=theory.ALL_NOTE_NAMES,
                description="Root note (key) of the progression.",
            ),
            ArgSpec(
                name="Progression",
                type=ArgType.STRING,
                required=True,
                is_variadic=True,
                ui_component=UIComponent.TOGGLE_BUTTON_SELECTOR,
                button_labels=theory.PROGRESSION_NUMERALS,
                example="I-vi-IV-V",
                description="Build the progression sequence using the Roman numeral buttons.",
            ),
            GUITAR_SETTINGS_ARG,
        ),
    ),
    factory=create_progression_feature,
)

# ---------------------------------------------------------------------------
# Triad Shapes
# ---------------------------------------------------------------------------

TRIAD_TYPE = "Triad Shapes"


def create_triad_feature(args: tuple[str, ...], context: FeatureContext) -> GuitarFeature:
    _require(args, 2, TRIAD_TYPE, "[RootNote, Quality, Inversion?]")
    key = _canonical_key(args[0])
    quality = args[1]
    inversion = args[2] if len(args) > 2 and args[2] else "All"
    try:
        notes = theory.triad_notes(key, quality, inversion)
    except ValueError as e:
        raise FeatureConfigError(str(e)) from e
    return GuitarFeature(
        type_name=TRIAD_TYPE,
        config=args,
        title=f"{key} {quality} Triads ({inversion})",
        notes=tuple(notes),
        metronome_bpm=_bpm(context),
        options={"inversion": inversion},
    )


TRIAD_DESCRIPTOR = FeatureTypeDescriptor(
    category=CATEGORY_NAME,
    type_name=TRIAD_TYPE,
    display_name="Triad Shapes",
    description="Shows triad shapes on adjacent string sets.",
    schema=ConfigurationSchema(
        description=f"Config: {TRIAD_TYPE},RootNote,Quality[,Inversion][,GuitarSettings]",
        args=(
            ArgSpec(
                name="Root Note",
                type=ArgType.ENUM,
                required=True,
                enum_values=theory.ALL_NOTE_NAMES,
                description="Root note of the triad.",
            ),
            ArgSpec(
                name="Quality",
                type=ArgType.ENUM,
                required=True,
                enum_values=theory.TRIAD_QUALITIES,
                description="Triad quality.",
            ),
            ArgSpec(
                name="Inversion",
                type=ArgType.ENUM,
                enum_values=theory.TRIAD_INVERSIONS,
                description="Inversion to show (default All).",
            ),
            GUITAR_SETTINGS_ARG,
        ),
    ),
    factory=create_triad_feature,
)

# ---------------------------------------------------------------------------
# CAGED
# ---------------------------------------------------------------------------

CAGED_TYPE = "CAGED"


def create_caged_feature(args: tuple[str, ...], context: FeatureContext) -> GuitarFeature:
    _require(args, 2, CAGED_TYPE, "[Key, ScaleType, LabelDisplay?]")
    key = _canonical_key(args[0])
    scale_type = args[1]
    scale = theory.resolve_scale(scale_type) if scale_type in theory.CAGED_SCALE_TYPES else None
    if scale is None:
        raise FeatureConfigError(f'Unsupported or unknown scale type: "{scale_type}"')
    label_display = args[2] if len(args) > 2 and args[2] else theory.CAGED_LABEL_OPTIONS[0]
    if label_display not in theory.CAGED_LABEL_OPTIONS:
        raise FeatureConfigError(f'Unknown label display: "{label_display}"')
    return GuitarFeature(
        type_name=CAGED_TYPE,
        config=args,
        title=f"CAGED: {key} {scale_type}",
        notes=tuple(theory.scale_notes(key, scale)),
        metronome_bpm=_bpm(context),
        options={"labelDisplay": label_display, "shapes": "".join(theory.CAGED_SHAPES)},
    )


CAGED_DESCRIPTOR = FeatureTypeDescriptor(
    category=CATEGORY_NAME,
    type_name=CAGED_TYPE,
    display_name="CAGED Scale Shapes",
    description="Shows the five CAGED shapes of a scale.",
    schema=ConfigurationSchema(
        description=f"Config: {CAGED_TYPE},Key,ScaleType[,LabelDisplay][,GuitarSettings]",
        args=(
            ArgSpec(
                name="Key",
                type=ArgType.ENUM,
                required=True,
                enum_values=theory.ALL_NOTE_NAMES,
                description="Key of the scale.",
            ),
            ArgSpec(
                name="Scale Type",
                type=ArgType.ENUM,
                required=True,
                enum_values=theory.CAGED_SCALE_TYPES,
                description="Scale to map onto the CAGED shapes.",
            ),
            ArgSpec(
                name="Label Display",
                type=ArgType.ENUM,
                enum_values=theory.CAGED_LABEL_OPTIONS,
                description="Label notes by interval or by name.",
            ),
            GUITAR_SETTINGS_ARG,
        ),
    ),
    factory=create_caged_feature,
)

# ---------------------------------------------------------------------------
# Metronome
# ---------------------------------------------------------------------------

METRONOME_TYPE = "Metronome"


def create_metronome_feature(args: tuple[str, ...], context: FeatureContext) -> GuitarFeature:
    bpm = _bpm(context)
    if bpm == 0:
        logger.warning("Metronome feature created with metronome off (BPM 0)")
    return GuitarFeature(
        type_name=METRONOME_TYPE,
        config=args,
        title=f"Metronome: {bpm} BPM" if bpm else "Metronome",
        metronome_bpm=bpm,
    )


METRONOME_DESCRIPTOR = FeatureTypeDescriptor(
    category=CATEGORY_NAME,
    type_name=METRONOME_TYPE,
    display_name="Metronome Only",
    description="Displays only a metronome. BPM is set via Guitar Settings.",
    schema=ConfigurationSchema(
        description=f"Config: {METRONOME_TYPE}[,GuitarSettings]",
        args=(GUITAR_SETTINGS_ARG,),
    ),
    factory=create_metronome_feature,
)


GUITAR_FEATURE_DESCRIPTORS: tuple[FeatureTypeDescriptor, ...] = (
    NOTES_DESCRIPTOR,
    SCALE_DESCRIPTOR,
    CHORD_DESCRIPTOR,
    PROGRESSION_DESCRIPTOR,
    TRIAD_DESCRIPTOR,
    CAGED_DESCRIPTOR,
    METRONOME_DESCRIPTOR,
)
