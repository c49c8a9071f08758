"""Playlist source implementations."""

from .itunes_com import ITunesComSource
from .itunes_xml import ITunesXmlSource

__all__ = ["ITunesComSource", "ITunesXmlSource"]
