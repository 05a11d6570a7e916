"""
Tests for service helpers that do not need HTTP.
"""
import json
import logging

import pytest

from surf_club.errors import ValidationError
from surf_club.logging_config import TEXT_FORMAT, build_formatter
from surf_club.services.session_service import normalize_paging, pagination, resolve_image_url


class TestResolveImageUrl:

    @pytest.mark.parametrize(
        "current, uploaded, keep, expected",
        [
            (None, None, None, None),
            (None, "/uploads/new.jpg", None, "/uploads/new.jpg"),
            ("/uploads/old.jpg", None, None, "/uploads/old.jpg"),
            ("/uploads/old.jpg", None, "true", "/uploads/old.jpg"),
            ("/uploads/old.jpg", None, "false", None),
            ("/uploads/old.jpg", "/uploads/new.jpg", "false", "/uploads/new.jpg"),
        ],
    )
    def test_resolve(self, current, uploaded, keep, expected):
        assert resolve_image_url(current, uploaded, keep) == expected


class TestPagination:

    def test_pagination_flags(self):
        assert pagination(2, 10, 25) == {
            "current_page": 2,
            "total_pages": 3,
            "has_next": True,
            "has_prev": True,
        }

    def test_pagination_empty(self):
        assert pagination(1, 10, 0)["total_pages"] == 0

    def test_normalize_paging(self):
        assert normalize_paging(0, 0, 10) == (1, 10)
        assert normalize_paging(3, 1000, 20) == (3, 20)
        assert normalize_paging(2, 5, 10) == (2, 5)


class TestErrors:

    def test_validation_error_body(self):
        error = ValidationError.single("q", "Too short")
        assert error.status_code == 400
        assert error.to_dict() == {"message": "Too short", "errors": [{"field": "q", "message": "Too short"}]}


class TestLogFormatter:

    def test_json_lines(self):
        record = logging.LogRecord("surf_club.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        data = json.loads(build_formatter("json").format(record))
        assert data["level"] == "info"
        assert data["logger"] == "surf_club.test"
        assert data["event"] == "hello world"
        assert "timestamp" in data

    def test_text_format(self):
        formatter = build_formatter("text")
        assert formatter._fmt == TEXT_FORMAT
