"""sheet2site: build Hugo content and params from Google Sheets / Drive."""

__version__ = "0.1.0"
