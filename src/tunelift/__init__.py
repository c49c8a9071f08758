"""TuneLift - export iTunes audio playlists as standard or extended .m3u files."""

__version__ = "1.0.0"
