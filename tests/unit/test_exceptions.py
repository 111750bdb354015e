"""Tests for custom exception classes."""

from fastapi_htmlkit.exceptions import (
    ErrorCode,
    EvaluationError,
    FormulaNotFoundError,
    HTMLKitException,
    LocalizationError,
    RegistrationError,
)


class TestErrorCodes:
    """Tests for ErrorCode enum."""

    def test_error_code_values(self):
        """Test that error codes have correct values."""
        assert ErrorCode.HTMLKIT_ERROR == "HTMLKIT_ERROR"
        assert ErrorCode.FORMULA_NOT_FOUND == "FORMULA_NOT_FOUND"
        assert ErrorCode.REGISTRATION_ERROR == "REGISTRATION_ERROR"
        assert ErrorCode.EVALUATION_ERROR == "EVALUATION_ERROR"
        assert ErrorCode.LOCALIZATION_ERROR == "LOCALIZATION_ERROR"


class TestHTMLKitException:
    """Tests for HTMLKitException."""

    def test_defaults(self):
        """Test creating a basic exception."""
        exc = HTMLKitException(message="Test error")

        assert exc.message == "Test error"
        assert exc.code == ErrorCode.HTMLKIT_ERROR
        assert exc.status_code == 500
        assert exc.details == {}
        assert str(exc) == "Test error"

    def test_identifier_names_the_kind(self):
        """Test identifier uses the concrete class name."""
        assert HTMLKitException("x").identifier == "HTMLKit.HTMLKitException"
        assert EvaluationError("x").identifier == "HTMLKit.EvaluationError"

    def test_reason_includes_cause(self):
        """Test reason appends the chained cause."""
        try:
            try:
                raise ValueError("bad token")
            except ValueError as e:
                raise RegistrationError("Template is malformed") from e
        except RegistrationError as exc:
            assert exc.reason == "Template is malformed: bad token"

    def test_reason_without_cause(self):
        """Test reason is the message when nothing is chained."""
        assert LocalizationError("Missing directory").reason == "Missing directory"


class TestErrorKinds:
    """Tests for the concrete error kinds."""

    def test_formula_not_found(self):
        """Test FormulaNotFoundError carries the view id."""
        exc = FormulaNotFoundError("app.views.HomePage")

        assert exc.code == ErrorCode.FORMULA_NOT_FOUND
        assert exc.status_code == 404
        assert exc.view_id == "app.views.HomePage"
        assert exc.details == {"view_id": "app.views.HomePage"}
        assert "app.views.HomePage" in exc.message

    def test_registration_error(self):
        """Test RegistrationError defaults."""
        exc = RegistrationError("Broken", details={"view_id": "v"})

        assert exc.code == ErrorCode.REGISTRATION_ERROR
        assert exc.status_code == 500
        assert exc.details["view_id"] == "v"

    def test_evaluation_error(self):
        """Test EvaluationError defaults."""
        exc = EvaluationError("Failed")

        assert exc.code == ErrorCode.EVALUATION_ERROR
        assert exc.status_code == 500

    def test_localization_error(self):
        """Test LocalizationError defaults."""
        exc = LocalizationError("Missing", details={"path": "/nowhere"})

        assert exc.code == ErrorCode.LOCALIZATION_ERROR
        assert exc.details["path"] == "/nowhere"

    def test_all_kinds_share_the_base(self):
        """Test every kind can be caught through the base class."""
        for exc in (
            FormulaNotFoundError("v"),
            RegistrationError("r"),
            EvaluationError("e"),
            LocalizationError("l"),
        ):
            assert isinstance(exc, HTMLKitException)
