"""Unit tests for mail rendering and sending."""

import smtplib
from unittest.mock import MagicMock, patch

import pytest

from recipe_manager.core.config.config import settings
from recipe_manager.exceptions.custom_exceptions import UnableToSendEmailError
from recipe_manager.utils.email import (
    CONFIRMATION,
    NOTIFICATION,
    RESET,
    Mail,
    render_mail,
    send_mail,
)


def _mail() -> Mail:
    return Mail(to="cook@example.com", subject="Hi", text="plain", html="<p>html</p>")


class TestRenderMail:
    """Unit tests for render_mail()."""

    @pytest.mark.unit
    def test_confirmation_contains_username_and_key(self) -> None:
        """Test that the confirmation link identifies account and key."""
        # Act
        mail = render_mail(
            CONFIRMATION,
            "cook@example.com",
            full_name="New Cook",
            username="newcook",
            key="1234-abcd",
        )

        # Assert
        assert mail.to == "cook@example.com"
        assert mail.subject
        assert "New Cook" in mail.text
        assert "username=newcook" in mail.text
        assert "key=1234-abcd" in mail.text
        assert "1234-abcd" in mail.html

    @pytest.mark.unit
    def test_reset_mentions_validity(self) -> None:
        """Test that the reset mail tells how long the link works."""
        # Act
        mail = render_mail(
            RESET,
            "cook@example.com",
            full_name="newcook",
            username="newcook",
            key="k",
            validity_hours=12,
        )

        # Assert
        assert "12 hours" in mail.text

    @pytest.mark.unit
    def test_notification_html_is_escaped(self) -> None:
        """Test that recipe names are escaped in the HTML body only."""
        # Arrange
        recipe = MagicMock(id=4, name="Fish & <Chips>")
        recipe.name = "Fish & <Chips>"

        # Act
        mail = render_mail(
            NOTIFICATION,
            "cook@example.com",
            full_name="Cook",
            username="cook",
            recipes=[recipe],
        )

        # Assert
        assert "Fish & <Chips>" in mail.text
        assert "Fish &amp; &lt;Chips&gt;" in mail.html


class TestSendMail:
    """Unit tests for send_mail()."""

    @pytest.mark.unit
    def test_sends_over_smtp(self) -> None:
        """Test that the message is handed to the SMTP server."""
        # Arrange
        with patch("recipe_manager.utils.email.smtplib.SMTP") as smtp_class:
            smtp = smtp_class.return_value.__enter__.return_value
            smtp.send_message.return_value = {}

            # Act
            send_mail(_mail())

        # Assert
        smtp.starttls.assert_called_once()
        message = smtp.send_message.call_args.args[0]
        assert message["To"] == "cook@example.com"
        assert message["Subject"] == "Hi"

    @pytest.mark.unit
    def test_refused_recipient(self) -> None:
        """Test that a refused recipient raises UnableToSendEmailError."""
        # Arrange
        with patch("recipe_manager.utils.email.smtplib.SMTP") as smtp_class:
            smtp = smtp_class.return_value.__enter__.return_value
            smtp.send_message.return_value = {"cook@example.com": (550, b"no")}

            # Act & Assert
            with pytest.raises(UnableToSendEmailError) as exc_info:
                send_mail(_mail())
        assert exc_info.value.recipients == ["cook@example.com"]

    @pytest.mark.unit
    def test_connection_failure(self) -> None:
        """Test that SMTP errors become UnableToSendEmailError."""
        # Arrange
        with patch(
            "recipe_manager.utils.email.smtplib.SMTP",
            side_effect=smtplib.SMTPConnectError(421, "busy"),
        ):
            # Act & Assert
            with pytest.raises(UnableToSendEmailError):
                send_mail(_mail())

    @pytest.mark.unit
    def test_plain_relay_without_starttls(self) -> None:
        """Test that servers without STARTTLS get the mail unencrypted."""
        # Arrange
        with patch("recipe_manager.utils.email.smtplib.SMTP") as smtp_class:
            smtp = smtp_class.return_value.__enter__.return_value
            smtp.has_extn.return_value = False
            smtp.send_message.return_value = {}

            # Act
            send_mail(_mail())

        # Assert
        smtp.has_extn.assert_called_once_with("starttls")
        smtp.starttls.assert_not_called()
        smtp.login.assert_not_called()
        smtp.send_message.assert_called_once()

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("user", "password", "logs_in"),
        [("mailer", "secret", True), ("mailer", "", False), ("", "secret", False)],
    )
    def test_login_needs_user_and_password(
        self,
        monkeypatch: pytest.MonkeyPatch,
        user: str,
        password: str,
        logs_in: bool,
    ) -> None:
        """Test that the client authenticates only with both credentials set."""
        # Arrange
        monkeypatch.setattr(settings, "EMAIL_USER", user)
        monkeypatch.setattr(settings, "EMAIL_PASS", password)
        with patch("recipe_manager.utils.email.smtplib.SMTP") as smtp_class:
            smtp = smtp_class.return_value.__enter__.return_value
            smtp.send_message.return_value = {}

            # Act
            send_mail(_mail())

        # Assert
        assert smtp.login.called is logs_in
