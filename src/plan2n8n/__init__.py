"""plan2n8n: render high-level automation plans into n8n workflow graphs."""

__version__ = "0.2.0"
