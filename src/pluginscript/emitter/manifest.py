"""
Plugin manifest schema and rendering.

Defines the structure of the plugin.yml descriptor that the server reads to
load the generated plugin. Manifests are validated using Pydantic and
rendered with PyYAML.
"""

import yaml
from pydantic import BaseModel, Field, field_validator


class CommandEntry(BaseModel):
    """One entry of the manifest's command table."""

    name: str = Field(
        ...,
        description="Command label as typed after the slash",
        min_length=1,
    )

    description: str = Field(
        ...,
        description="Help text shown by the server",
    )

    usage: str = Field(
        ...,
        description="Usage string (e.g., '/spawn')",
    )

    @field_validator("usage")
    @classmethod
    def validate_usage(cls, value: str) -> str:
        """Ensure usage starts with a slash."""
        if not value.startswith("/"):
            value = f"/{value}"
        return value


class PluginManifest(BaseModel):
    """Contents of plugin.yml."""

    name: str = Field(
        ...,
        description="Plugin name, also used for the jar and data folder",
        min_length=1,
    )

    version: str = Field(
        ...,
        description="Plugin version string",
        min_length=1,
    )

    main: str = Field(
        ...,
        description="Fully qualified entry point class (e.g., 'me.example.Main')",
    )

    commands: list[CommandEntry] = Field(
        default_factory=list,
        description="Command table, in declaration order",
    )

    @field_validator("main")
    @classmethod
    def validate_main(cls, value: str) -> str:
        """Ensure main has at least package.Class structure."""
        package, _, class_name = value.rpartition(".")
        if not package or not class_name:
            raise ValueError(
                f"main must be fully qualified (e.g., 'package.Main'), got: {value}"
            )
        return value

    def command_names(self) -> list[str]:
        return [command.name for command in self.commands]

    def to_dict(self) -> dict:
        """Layout expected by the server: commands keyed by name."""
        return {
            "name": self.name,
            "version": self.version,
            "main": self.main,
            "commands": {
                command.name: {
                    "description": command.description,
                    "usage": command.usage,
                }
                for command in self.commands
            },
        }

    def to_yaml(self) -> str:
        return yaml.safe_dump(
            self.to_dict(),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
