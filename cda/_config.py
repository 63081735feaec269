"""Run settings — environment variables (or a .env file), overridable by CLI flags."""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass

from dotenv import load_dotenv

from extractor.assembler import COMMENT_URL
from html_parser.parser import INDEX_URL

ROOT = pathlib.Path(__file__).resolve().parent.parent


@dataclass(frozen=True, slots=True)
class Settings:
    index_url: str                        # template with a {year} placeholder
    comment_url: str
    reference_dir: pathlib.Path | None    # None → bundled reference tables
    request_delay: float                  # seconds between HTTP requests


def load_settings(env_file: pathlib.Path | None = None) -> Settings:
    # variables already set in the environment win over the .env file
    load_dotenv(env_file or ROOT / ".env", override=False)
    reference_dir = os.getenv("CDA_REFERENCE_DIR")
    return Settings(
        index_url     = os.getenv("CDA_INDEX_URL", INDEX_URL),
        comment_url   = os.getenv("CDA_COMMENT_URL", COMMENT_URL),
        reference_dir = pathlib.Path(reference_dir) if reference_dir else None,
        request_delay = float(os.getenv("CDA_REQUEST_DELAY", "2")),
    )
