"""
Utility functions for the shadow class generator.
"""

import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def first_letter_to_lower_case(text: str) -> str:
    """Lower-case the first letter: "FooBar" -> "fooBar"."""
    return text[:1].lower() + text[1:]


def first_letter_to_upper_case(text: str) -> str:
    """Upper-case the first letter: "fooBar" -> "FooBar"."""
    return text[:1].upper() + text[1:]


def camel_to_snake_case(text: str) -> str:
    """Convert camelCase or PascalCase to snake_case.

    Examples:
        "fooBar" -> "foo_bar"
        "Foo" -> "foo"
        "first_name" -> "first_name"
    """
    words = _WORD_PATTERN.findall(text.replace("-", "_"))
    return "_".join(word.lower() for word in words if word)


def java_getter_name(field_name: str) -> str:
    """Getter name following the JavaBeans convention: "id" -> "getId"."""
    return "get" + first_letter_to_upper_case(field_name)


def python_getter_name(field_name: str) -> str:
    """Getter name for Python output: "firstName" -> "get_first_name"."""
    return "get_" + camel_to_snake_case(field_name)


def parameter_name(class_name: str) -> str:
    """Parameter name for an instance of a class: "AutoValue_Foo" -> "autoValue_Foo"."""
    return first_letter_to_lower_case(class_name)
