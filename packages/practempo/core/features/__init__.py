"""Feature types: schemas, settings, registry and the argument codec."""

from practempo.core.features.codec import DecodedArgs, decode_args, encode_args, validate_args
from practempo.core.features.descriptor import Feature, FeatureContext, FeatureTypeDescriptor
from practempo.core.features.registry import Category, FeatureRegistry
from practempo.core.features.schema import ArgSpec, ArgType, ConfigurationSchema, UIComponent
from practempo.core.features.settings import EmptyIntervalSettings, IntervalSettings

__all__ = [
    # Schema
    "ArgSpec",
    "ArgType",
    "ConfigurationSchema",
    "UIComponent",
    # Settings
    "IntervalSettings",
    "EmptyIntervalSettings",
    # Descriptors
    "Feature",
    "FeatureContext",
    "FeatureTypeDescriptor",
    # Registry
    "Category",
    "FeatureRegistry",
    # Codec
    "DecodedArgs",
    "decode_args",
    "encode_args",
    "validate_args",
]
