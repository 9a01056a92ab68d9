"""
Tests for localized errors: derived texts, descriptions, cause chains and equality.
"""

import copy
import logging
import pickle

import pytest
from fehlerteufel.config import FehlerteufelConfig, set_default_config
from fehlerteufel.errors import MissingParameterError, UnresolvableCauseError
from fehlerteufel.runtime.catalog import Catalog, set_default_catalog
from fehlerteufel.runtime.clause import Clause
from fehlerteufel.runtime.localized import (
    ErrorKind,
    LocalizedError,
    as_localized_error,
    error_description,
    failure_reason,
    full_description,
    short_description,
)
from fehlerteufel.runtime.record import ErrorRecord
from fehlerteufel.runtime.severity import Severity


class MyError(LocalizedError, prefix="MyError", table="MyErrors"):

    @classmethod
    def file_error(cls, name="A", path="/tmp", code=None, severity=Severity.WARNING,
                   description=None, cause=None, recovery=None):
        return cls.make(
            code=code,
            severity=severity,
            description=description,
            cause=cause,
            recovery=recovery,
            failure=lambda: Clause("File ", ("name", name), " not found at ", ("path", path), "."),
        )

    @classmethod
    def disk_full(cls, cause=None):
        return cls.make(severity=Severity.ERROR, cause=cause)


class OtherError(LocalizedError, prefix="OtherError"):

    @classmethod
    def file_error(cls):
        return cls.make()


class Unprefixed(LocalizedError):
    failure_prefix = ""
    recovery_prefix = ""

    @classmethod
    def broken(cls):
        return cls.make(failure=lambda: Clause("Broken ", ("part", "wheel")), recovery="Fix it")


class ChildError(MyError):
    """Inherits prefix and table"""


def use(catalog):
    set_default_catalog(catalog)
    return catalog


class TestDeclaration:

    def test_class_keywords(self):
        assert MyError.prefix == "MyError"
        assert MyError.table_name == "MyErrors"

    def test_defaults(self):
        assert Unprefixed.prefix == ""
        assert Unprefixed.table_name is None
        assert LocalizedError.failure_prefix == "failure"
        assert LocalizedError.recovery_prefix == "recovery"

    def test_subclass_inherits(self):
        assert ChildError.prefix == "MyError"
        assert ChildError.table_name == "MyErrors"

    def test_conforms_to_error_kind(self):
        assert isinstance(MyError.disk_full(), ErrorKind)
        assert not isinstance(ValueError("x"), ErrorKind)


class TestProducedSurface:

    def test_name_from_classmethod(self):
        assert MyError.file_error().name == "file_error"

    def test_explicit_name_truncated(self):
        assert MyError.make("fileError(x)").name == "fileError"

    def test_fields(self):
        cause = ValueError("x")
        err = MyError.file_error(code=404, cause=cause)
        assert err.code == 404
        assert err.severity is Severity.WARNING
        assert err.cause is cause
        assert err.__cause__ is cause

    def test_no_cause(self):
        err = MyError.disk_full()
        assert err.cause is None
        assert err.__cause__ is None

    def test_is_exception(self):
        with pytest.raises(MyError) as exc:
            raise MyError.disk_full()
        assert exc.value.name == "disk_full"

    def test_from_record(self):
        err = MyError.from_record(ErrorRecord("custom"))
        assert isinstance(err, MyError)
        assert err.name == "custom"

    def test_repr(self):
        assert repr(MyError.disk_full()) == "MyError('disk_full')"


class TestErrorDescription:

    def test_defaults_to_name(self):
        """Without description and translation the name is the title."""
        assert MyError.disk_full().error_description == "disk_full"

    def test_translated_by_prefixed_name(self):
        use(Catalog({"": {"MyErrors": {"MyError.disk_full": "Disk full"}}}))
        assert MyError.disk_full().error_description == "Disk full"

    def test_explicit_description(self):
        assert MyError.file_error(description="File Error Occurred").error_description == \
            "File Error Occurred"

    def test_explicit_description_key(self):
        """An explicit title is looked up under <prefix>.<name>.<title>."""
        use(Catalog({"": {"MyErrors": {
            "MyError.file_error.File Error Occurred": "Occurrence of file error",
            "MyError.file_error": "not used",
        }}}))
        err = MyError.file_error(description="File Error Occurred")
        assert err.error_description == "Occurrence of file error"

    def test_description_with_parameters(self):
        use(Catalog({"de": {"MyErrors": {
            "MyError.file_error.Cannot open {file}": "{file} kann nicht geöffnet werden",
        }}}, locale="de"))
        err = MyError.file_error(description=Clause("Cannot open ", ("file", "a.txt")))
        assert err.error_description == "a.txt kann nicht geöffnet werden"

    def test_default_table(self):
        """Types without a table use the configured default table."""
        use(Catalog({"": {"Localizable": {"broken": "Kaputt"}}}))
        assert Unprefixed.broken().error_description == "Kaputt"

    def test_unprefixed_key_is_name(self):
        use(Catalog({"": {"Localizable": {"Unprefixed.broken": "wrong"}}}))
        assert Unprefixed.broken().error_description == "broken"

    def test_explicit_catalog(self):
        catalog = Catalog({"": {"MyErrors": {"MyError.disk_full": "Voll"}}})
        assert error_description(MyError.disk_full(), catalog) == "Voll"
        assert MyError.disk_full().error_description == "disk_full"


class TestFailureReason:

    def test_none_without_failure(self):
        assert MyError.disk_full().failure_reason is None
        assert MyError.disk_full().recovery_suggestion is None

    def test_default_rendering(self):
        err = MyError.file_error(name="A", path="/tmp")
        assert err.failure_reason == "File A not found at /tmp."

    def test_translation_reorders_parameters(self):
        use(Catalog({"de": {"MyErrors": {
            "MyError.file_error.failure.File {name} not found at {path}.":
                "{path} hat keine Datei {name}.",
        }}}, locale="de"))
        err = MyError.file_error(name="A", path="/tmp")
        assert err.failure_reason == "/tmp hat keine Datei A."

    def test_locale_without_translation(self):
        use(Catalog({"de": {"MyErrors": {
            "MyError.file_error.failure.File {name} not found at {path}.":
                "{path} hat keine Datei {name}.",
        }}}, locale="fr"))
        assert MyError.file_error().failure_reason == "File A not found at /tmp."

    def test_computed_on_every_access(self):
        catalog = use(Catalog())
        err = MyError.file_error()
        assert err.failure_reason == "File A not found at /tmp."
        catalog.add("", "MyErrors", {
            "MyError.file_error.failure.File {name} not found at {path}.": "Missing {name}",
        })
        assert err.failure_reason == "Missing A"

    def test_translation_with_unbound_parameter(self):
        """E001 surfaces from the accessor."""
        use(Catalog({"": {"MyErrors": {
            "MyError.file_error.failure.File {name} not found at {path}.": "{filename}",
        }}}))
        with pytest.raises(MissingParameterError):
            MyError.file_error().failure_reason

    def test_recovery_key(self):
        use(Catalog({"": {"MyErrors": {"MyError.file_error.recovery.Check the path": "Pfad prüfen"}}}))
        err = MyError.file_error(recovery="Check the path")
        assert err.recovery_suggestion == "Pfad prüfen"

    def test_empty_prefixes_use_bare_skeleton(self):
        use(Catalog({"": {"Localizable": {
            "Broken {part}": "{part} ist kaputt",
            "Fix it": "Reparieren",
        }}}))
        err = Unprefixed.broken()
        assert err.failure_reason == "wheel ist kaputt"
        assert err.recovery_suggestion == "Reparieren"

    def test_explicit_catalog(self):
        catalog = Catalog({"": {"MyErrors": {
            "MyError.file_error.failure.File {name} not found at {path}.": "{path}",
        }}})
        assert failure_reason(MyError.file_error(), catalog) == "/tmp"


class TestDescriptions:

    def test_short_description_title_only(self):
        assert MyError.disk_full().short_description == "disk_full"

    def test_short_description_all_parts(self):
        err = MyError.file_error(recovery="Check the path")
        assert err.short_description == "file_error - File A not found at /tmp. - Check the path"

    def test_short_description_skips_missing_failure(self):
        err = MyError.make("e", recovery="Retry")
        assert err.short_description == "e - Retry"

    def test_configured_separator(self):
        set_default_config(FehlerteufelConfig(separator=" | "))
        assert MyError.file_error().short_description == "file_error | File A not found at /tmp."

    def test_explicit_separator(self):
        assert short_description(MyError.file_error(), separator="\n") == \
            "file_error\nFile A not found at /tmp."

    def test_description_without_cause_equals_short(self):
        err = MyError.file_error()
        assert err.description == err.short_description
        assert str(err) == err.description

    def test_localized_cause_chain(self):
        inner = OtherError.file_error()
        middle = MyError.disk_full(cause=inner)
        outer = MyError.file_error(cause=middle)
        assert outer.description == \
            "file_error - File A not found at /tmp. - disk_full - file_error"
        assert outer.short_description == "file_error - File A not found at /tmp."

    def test_cause_chain_translated(self):
        use(Catalog({"": {"MyErrors": {"MyError.disk_full": "Disk full"}}}))
        err = MyError.file_error(cause=MyError.disk_full())
        assert err.description.endswith(" - Disk full")

    def test_plain_cause_included(self):
        err = MyError.disk_full(cause=ValueError("bad sector"))
        assert err.description == "disk_full - bad sector"

    def test_plain_cause_dropped(self):
        err = MyError.disk_full(cause=ValueError("bad sector"))
        assert full_description(err, include_cause=False) == "disk_full"

    def test_plain_cause_dropped_by_config(self):
        set_default_config(FehlerteufelConfig(include_cause=False))
        assert MyError.disk_full(cause=ValueError("bad sector")).description == "disk_full"

    def test_plain_cause_dropped_by_type(self):
        class QuietError(LocalizedError, prefix="QuietError"):
            include_cause = False

        err = QuietError.make("quiet", cause=ValueError("bad sector"))
        assert err.description == "quiet"

    def test_plain_cause_logged(self, caplog):
        err = MyError.disk_full(cause=ValueError("bad sector"))
        with caplog.at_level(logging.WARNING, logger="fehlerteufel.runtime.localized"):
            err.description
        assert "Non localized error" in caplog.text

    def test_plain_cause_deep_in_chain(self):
        err = MyError.file_error(cause=MyError.disk_full(cause=KeyError("k")))
        assert full_description(err, include_cause=False) == \
            "file_error - File A not found at /tmp. - disk_full"


class TestAsLocalizedError:

    def test_localized(self):
        err = MyError.disk_full()
        assert as_localized_error(err) is err

    def test_plain_returns_none(self):
        assert as_localized_error(ValueError("x")) is None

    def test_plain_strict_raises(self):
        with pytest.raises(UnresolvableCauseError) as exc:
            as_localized_error(ValueError("x"), strict=True)
        assert exc.value.code == "E200"


class TestEquality:

    def test_same_name_equal(self):
        """Equality ignores code, severity and cause."""
        a = MyError.make("file_error", code=1, severity=Severity.INFO)
        b = MyError.make("file_error", code=2, severity=Severity.FATAL, cause=ValueError())
        assert a == b
        assert hash(a) == hash(b)

    def test_different_name_unequal(self):
        assert MyError.file_error() != MyError.disk_full()

    def test_truncated_names_equal(self):
        assert MyError.make("fileError(x)") == MyError.make("fileError(y)")

    def test_different_types_unequal(self):
        assert MyError.file_error() != OtherError.file_error()
        assert MyError.file_error() != ChildError.file_error()

    def test_not_equal_to_plain_values(self):
        assert MyError.disk_full() != "disk_full"

    def test_usable_in_sets(self):
        errors = {MyError.file_error(), MyError.file_error(path="/var"), MyError.disk_full()}
        assert len(errors) == 2


class TestCopying:

    def test_copy(self):
        err = MyError.file_error(recovery="Check the path")
        copied = copy.copy(err)
        assert copied == err
        assert copied.record is err.record

    def test_deepcopy(self):
        err = MyError.file_error(code=404)
        copied = copy.deepcopy(err)
        assert copied == err
        assert copied.code == 404
        assert copied.failure_reason == "File A not found at /tmp."

    def test_pickle_keeps_details(self):
        err = MyError.file_error(name="B", path="/var", code=7, recovery="Check the path")
        restored = pickle.loads(pickle.dumps(err))
        assert type(restored) is MyError
        assert restored == err
        assert restored.code == 7
        assert restored.severity is Severity.WARNING
        assert restored.failure_reason == "File B not found at /var."
        assert restored.recovery_suggestion == "Check the path"

    def test_pickle_keeps_cause(self):
        err = MyError.file_error(cause=MyError.disk_full(cause=ValueError("bad sector")))
        restored = pickle.loads(pickle.dumps(err))
        assert restored.cause == MyError.disk_full()
        assert restored.__cause__ is restored.cause
        assert restored.description == err.description
