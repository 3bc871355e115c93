from __future__ import annotations

import importlib
import warnings

import pytest

from kbase.i18n import Translator
from kbase.imports import DuplicateCheckError, ImportErrorKind, ImportFileError
from kbase.routes.api import utils


def test_module_imports_without_deprecation_warnings() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        importlib.reload(utils)


@pytest.mark.parametrize(
    ("kind", "status_code"),
    [
        (ImportErrorKind.INVALID_FORMAT, 415),
        (ImportErrorKind.FILE_TOO_LARGE, 413),
        (ImportErrorKind.EMPTY_FILE, 422),
        (ImportErrorKind.PARSE_ERROR, 422),
    ],
)
def test_import_errors_map_to_status_codes(kind, status_code) -> None:
    exc = utils.import_error_http_exception(
        ImportFileError("rejected", kind=kind), Translator("en"), 1024
    )

    assert exc.status_code == status_code
    assert exc.detail["kind"] == kind.value
    assert exc.detail["reason"] == "rejected"


def test_duplicate_check_failure_maps_to_503() -> None:
    exc = utils.import_error_http_exception(
        DuplicateCheckError("Duplicate check failed: locked"), Translator("en"), 1024
    )

    assert exc.status_code == 503
    assert exc.detail["kind"] == "DuplicateCheckFailed"
