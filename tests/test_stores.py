"""Tests for SingleStore, PluralStore, LookupResult and TranslationFile.

Python 3.13+.
"""

from __future__ import annotations

import logging

import pytest

from pocatalog.diagnostics import (
    CategoryNotFoundError,
    NotFoundError,
    TemplateFormatError,
    TranslationNotFoundError,
)
from pocatalog.enums import LookupStatus
from pocatalog.runtime import LookupResult, PluralStore, SingleStore, TranslationFile
from pocatalog.syntax import PluralFormula


def two_form_store() -> PluralStore:
    store = PluralStore(formula=PluralFormula.from_expression("n != 1", 2))
    store.add("YOU TAPPED TIMES", 0, "You tapped %d time")
    store.add("YOU TAPPED TIMES", 1, "You tapped %d times")
    return store


class TestSingleStore:
    """Singular templates."""

    def test_get_formats(self) -> None:
        store = SingleStore({"Counter: %d": "Counter: %d"})
        assert store.get("Counter: %d", 5) == "Counter: 5"

    def test_get_without_args_returns_template(self) -> None:
        store = SingleStore({"P": "100%"})
        assert store.get("P") == "100%"

    def test_missing_key_raises(self) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            SingleStore().get("absent")
        assert exc_info.value.key == "absent"

    def test_not_found_is_key_error(self) -> None:
        """Miss errors can be caught as the builtin KeyError."""
        with pytest.raises(KeyError):
            SingleStore().get("absent")

    def test_not_found_message_unquoted(self) -> None:
        """KeyError's repr-style str() is replaced by the plain message."""
        with pytest.raises(TranslationNotFoundError) as exc_info:
            SingleStore().get("absent")
        assert str(exc_info.value) == "Cannot find string with key 'absent'"

    def test_set_overwrites(self) -> None:
        store = SingleStore()
        store.set("A", "first")
        store.set("A", "second")
        assert store.template("A") == "second"
        assert len(store) == 1

    def test_override_debug_log(self, caplog: pytest.LogCaptureFixture) -> None:
        store = SingleStore({"A": "first"})
        with caplog.at_level(logging.DEBUG, logger="pocatalog.runtime.stores"):
            store.set("A", "second")
        assert caplog.records[0].levelno == logging.DEBUG

    def test_append(self) -> None:
        store = SingleStore({"A": "one "})
        store.append("A", "two")
        assert store.template("A") == "one two"

    def test_lookup_found(self) -> None:
        result = SingleStore({"HELLO": "Bonjour %s"}).lookup("HELLO", "Ana")
        assert result == LookupResult(LookupStatus.FOUND, "HELLO", "Bonjour Ana")
        assert result.found

    def test_lookup_missing(self) -> None:
        result = SingleStore().lookup("HELLO")
        assert result.status == LookupStatus.MISSING_KEY
        assert result.value is None
        assert not result.found

    def test_container_protocol(self) -> None:
        store = SingleStore({"A": "a", "B": "b"})
        assert "A" in store
        assert store.has("B")
        assert sorted(store) == ["A", "B"]
        assert store.as_mapping() == {"A": "a", "B": "b"}

    def test_mapping_view_read_only(self) -> None:
        view = SingleStore({"A": "a"}).as_mapping()
        with pytest.raises(TypeError):
            view["B"] = "b"  # type: ignore[index]

    def test_equality(self) -> None:
        assert SingleStore({"A": "a"}) == SingleStore({"A": "a"})
        assert SingleStore({"A": "a"}) != SingleStore({"A": "b"})

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(SingleStore())


class TestPluralStore:
    """Plural templates selected by the store's formula."""

    def test_category_selection(self) -> None:
        store = two_form_store()
        assert store.get("YOU TAPPED TIMES", 1, 1) == "You tapped 1 time"
        assert store.get("YOU TAPPED TIMES", 3, 3) == "You tapped 3 times"

    def test_quantity_not_substituted_implicitly(self) -> None:
        """The quantity selects the form; args are substituted separately."""
        assert two_form_store().get("YOU TAPPED TIMES", 3) == "You tapped %d times"

    def test_missing_key_raises(self) -> None:
        with pytest.raises(NotFoundError):
            two_form_store().get("absent", 1)

    def test_missing_category_raises(self) -> None:
        store = PluralStore(formula=PluralFormula.from_expression("n==1 ? 0 : n==2 ? 1 : 2", 3))
        store.add("K", 0, "one")
        with pytest.raises(CategoryNotFoundError) as exc_info:
            store.get("K", 5)
        error = exc_info.value
        assert (error.key, error.category, error.quantity) == ("K", 2, 5)

    def test_lookup_missing_category(self, caplog: pytest.LogCaptureFixture) -> None:
        store = PluralStore(formula=PluralFormula.from_expression("n != 1", 2))
        store.add("K", 0, "one")
        with caplog.at_level(logging.WARNING):
            result = store.lookup("K", 2)
        assert result.status == LookupStatus.MISSING_CATEGORY
        assert result.category == 1
        assert "Plural category 1 missing" in caplog.text

    def test_lookup_found_records_category(self) -> None:
        result = two_form_store().lookup("YOU TAPPED TIMES", 7, 7)
        assert result == LookupResult.hit("YOU TAPPED TIMES", "You tapped 7 times", 1)

    def test_lookup_missing_key(self) -> None:
        assert two_form_store().lookup("absent", 1) == LookupResult.missing("absent")

    def test_default_formula_selects_zero(self) -> None:
        store = PluralStore()
        store.add("K", 0, "zero")
        store.add("K", 1, "one")
        assert store.get("K", 1) == "zero"

    def test_append_extends_category(self) -> None:
        store = PluralStore()
        store.add("K", 1, "a")
        store.append("K", 1, "b")
        assert store.categories("K")[1] == "ab"

    def test_categories_missing_raises(self) -> None:
        with pytest.raises(NotFoundError):
            PluralStore().categories("K")

    def test_equality_includes_formula(self) -> None:
        plurals = {"K": {0: "a"}}
        assert PluralStore(plurals=plurals) == PluralStore(plurals=plurals)
        assert PluralStore(plurals=plurals) != PluralStore(
            formula=PluralFormula.from_expression("n != 1"), plurals=plurals
        )

    def test_format_error_propagates(self) -> None:
        with pytest.raises(TemplateFormatError):
            two_form_store().get("YOU TAPPED TIMES", 2, "not a number")


class TestTranslationFile:
    """Parsed-file record."""

    def test_defaults(self) -> None:
        po = TranslationFile(singles=SingleStore(), plurals=PluralStore())
        assert po.language is None
        assert po.headers == {}
        assert not po.has_junk

    def test_frozen(self) -> None:
        po = TranslationFile(singles=SingleStore(), plurals=PluralStore())
        with pytest.raises(AttributeError):
            po.source_path = "x.po"  # type: ignore[misc]
