"""ORM models. Importing this package registers every table on Base.metadata."""

from app.models.rephrase import RephraseSession, RephraseVariant

__all__ = ["RephraseSession", "RephraseVariant"]
