from .content_classifier import ContentClassifier, EntryDraft

__all__ = ["ContentClassifier", "EntryDraft"]
