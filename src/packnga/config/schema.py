"""Configuration schema for packnga using nested Pydantic models."""

from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LANGUAGE_PATTERN = r"^[a-z]{2,3}(_[A-Z]{2})?$"

LanguageCode = Annotated[str, Field(pattern=LANGUAGE_PATTERN)]


class ReferenceConfig(BaseModel):
    """Reference documentation and translation configuration."""

    base_dir: str = Field(
        default="doc",
        description="Base directory of documents",
        min_length=1,
    )
    original_language: LanguageCode = Field(
        default="en",
        description="Language the reference is generated in",
    )
    translate_languages: list[LanguageCode] = Field(
        default_factory=lambda: ["ja"],
        description="Languages the reference is translated to",
    )

    @field_validator("translate_languages")
    @classmethod
    def deduplicate_languages(cls, v: list[str]) -> list[str]:
        """Drop duplicated language codes while keeping their first position."""
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def exclude_original_language(self) -> "ReferenceConfig":
        """The original language is never a translation target."""
        if self.original_language in self.translate_languages:
            self.translate_languages = [
                language
                for language in self.translate_languages
                if language != self.original_language
            ]
        return self


class PublishConfig(BaseModel):
    """Remote host configuration for rsync uploads."""

    host: str = Field(
        ...,
        description="Host name of the web server",
        min_length=1,
    )
    username: str = Field(
        ...,
        description="User name on the web server",
        min_length=1,
    )
    remote_dir: str = Field(
        ...,
        description="Document root of the project on the web server",
        min_length=1,
    )
    exclude: list[str] = Field(
        default_factory=lambda: ["*.erb"],
        description="Patterns excluded from the upload",
    )
    delete: bool = Field(
        default=False,
        description="Delete remote files that don't exist locally",
    )
    dry_run: bool = Field(
        default=False,
        description="Only show what rsync would transfer",
    )

    @field_validator("remote_dir")
    @classmethod
    def normalize_remote_dir(cls, v: str) -> str:
        """Make sure the remote directory ends with a slash."""
        return v if v.endswith("/") else v + "/"


class ReleaseConfig(BaseModel):
    """Release configuration."""

    index_html_dir: str = Field(
        default="doc/html",
        description="Directory holding index HTML files written with version and release date",
        min_length=1,
    )
    tag_message: str = Field(
        default="release {version}!!!",
        description="Message used when tagging a release; {version} is substituted",
    )


class PackngaConfig(BaseModel):
    """
    Configuration model for packnga task definitions.

    Values here are the defaults the task objects start from; a project's
    tasks.py may still override individual attributes.
    """

    reference: ReferenceConfig = Field(default_factory=ReferenceConfig)
    release: ReleaseConfig = Field(default_factory=ReleaseConfig)
    publish: PublishConfig | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="forbid",
        frozen=False,
    )
