"""User preferences."""

from alpha_tracker.domain.models import Language
from alpha_tracker.repositories import StateRepository


class PreferenceService:
    """Holds the UI language, which is also the language research is requested in."""

    def __init__(self, state_repo: StateRepository, default_language: Language = Language.ZH):
        self._repo = state_repo
        self._language = state_repo.load_language(Language(default_language))

    @property
    def language(self) -> Language:
        return self._language

    def set_language(self, language: Language) -> Language:
        self._language = Language(language)
        self._repo.save_language(self._language)
        return self._language
