"""YAML loading and saving of GFM rendering options.

Options files hold a single top-level ``gfm`` mapping:

    gfm:
      tables: true
      breaks: true
      header_ids: true
      syntax_highlight: true

Keys left out take the GFMOptions defaults.
"""

import os
from typing import Any, Dict

import yaml

from richtext_engine.errors import ImportFormatError
from richtext_engine.models import GFMOptions

from .errors import InputFileError, OptionsFileError


class OptionsLoader:
    """Handles options file loading, validation, and saving."""

    SECTION = 'gfm'

    @classmethod
    def load(cls, options_path: str) -> GFMOptions:
        """Load and parse GFM options from a YAML file.

        Args:
            options_path: Path to the YAML options file

        Returns:
            GFMOptions with the file's values applied over the defaults

        Raises:
            InputFileError: If file cannot be read
            OptionsFileError: If the file is malformed or holds invalid values
        """
        try:
            with open(options_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise InputFileError(options_path, 'read', 'Options file not found')
        except PermissionError:
            raise InputFileError(options_path, 'read', 'Permission denied')
        except OSError as e:
            raise InputFileError(options_path, 'read', str(e))

        try:
            options_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise OptionsFileError(f"Invalid YAML syntax: {str(e)}")

        if options_dict is None:
            return GFMOptions()

        if not isinstance(options_dict, dict):
            raise OptionsFileError(
                f"Options file must be a YAML dictionary, got {type(options_dict).__name__}"
            )

        return cls._parse_options(options_dict)

    @classmethod
    def save(cls, options_path: str, options: GFMOptions) -> None:
        """Save GFM options to a YAML file.

        Args:
            options_path: Path to the YAML options file
            options: Options to write

        Raises:
            InputFileError: If file cannot be written
        """
        yaml_str = yaml.safe_dump(
            {cls.SECTION: options.to_dict()},
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        options_dir = os.path.dirname(options_path)
        if options_dir:
            try:
                os.makedirs(options_dir, exist_ok=True)
            except OSError as e:
                raise InputFileError(options_dir, 'create_directory', str(e))

        try:
            with open(options_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise InputFileError(options_path, 'write', 'Permission denied')
        except OSError as e:
            raise InputFileError(options_path, 'write', str(e))

    @classmethod
    def _parse_options(cls, options_dict: Dict[str, Any]) -> GFMOptions:
        unknown = set(options_dict) - {cls.SECTION}
        if unknown:
            raise OptionsFileError(
                f"Unknown top-level fields: {', '.join(sorted(unknown))}"
            )

        section = options_dict.get(cls.SECTION)
        if section is None:
            return GFMOptions()
        if not isinstance(section, dict):
            raise OptionsFileError(
                f"must be a mapping, got {type(section).__name__}",
                option_field=cls.SECTION,
            )

        try:
            return GFMOptions.from_dict(section)
        except ImportFormatError as e:
            raise OptionsFileError(e.original_message, option_field=e.field_name)
