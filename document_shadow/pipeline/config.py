"""
Configuration for the shadow generation pipeline.

The naming convention and the annotation allow-list live here so they can
be swapped without touching classification or generation logic.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for the optional formatter pass on Python output."""

    enabled: bool = False
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"


@dataclass
class NamingConvention:
    """Names of generated classes.

    A value class ``Foo`` gets a generated class ``<generated_prefix>Foo``
    holding an inner ``<shadow_suffix>`` class. Generators chained on the same
    value class prepend ``chain_marker`` to intermediate class names.
    """

    generated_prefix: str = "AutoValue_"
    shadow_suffix: str = "FirebaseValue"
    chain_marker: str = "$"


@dataclass
class AnnotationConfig:
    """Annotations the generator recognizes. Every other annotation is dropped."""

    # Opt-in marker on the value class
    marker: str = "me.mattlogan.auto.value.firebase.annotation.FirebaseValue"

    # Class-level extra-property policies, forwarded to the shadow class
    class_policies: list[str] = field(
        default_factory=lambda: [
            "com.google.firebase.database.IgnoreExtraProperties",
            "com.google.firebase.database.ThrowOnExtraProperties",
        ]
    )

    # Property-level annotations, forwarded to the getters
    exclude: str = "com.google.firebase.database.Exclude"
    rename: str = "com.google.firebase.database.PropertyName"


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    naming: NamingConvention = field(default_factory=NamingConvention)
    annotations: AnnotationConfig = field(default_factory=AnnotationConfig)

    # Generate shadows for values reached through nested references even if
    # they don't carry the marker annotation
    generate_nested: bool = True

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Use from __future__ import annotations (Python output)
    use_future_annotations: bool = True

    # Module the Python output imports value classes from when a value has no
    # package of its own
    python_value_module: str = ""

    formatter: FormatterConfig = field(default_factory=FormatterConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "naming" and isinstance(v, dict):
                config.naming = NamingConvention(**v)
            elif k == "annotations" and isinstance(v, dict):
                config.annotations = AnnotationConfig(**v)
            elif k == "formatter" and isinstance(v, dict):
                config.formatter = FormatterConfig(**v)
            elif k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                config.output = OutputConfig(
                    mode=OutputMode(mode),
                    validate_before_write=v.get("validate_before_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        d = asdict(self)
        d["output"]["mode"] = self.output.mode.value
        return d
