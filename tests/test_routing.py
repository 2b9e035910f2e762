"""Tests for controller names and area detection."""

from view_mailer.mailer import MailerBase
from view_mailer.routing import build_route_data, controller_name_for, detect_area


class WelcomeMailer(MailerBase):
    pass


class TestMailController(MailerBase):
    __test__ = False


class NewsletterDigest(MailerBase):
    controller_name = "digest"


class SupportMailer(MailerBase):
    __module__ = "helpdesk.areas.support.mailers"


class TestControllerName:
    """Tests for controller_name_for."""

    def test_mailer_suffix_is_removed(self):
        """Test the Mailer suffix is dropped."""
        assert controller_name_for(WelcomeMailer) == "welcome"

    def test_controller_suffix_is_removed(self):
        """Test the Controller suffix is dropped and the rest snake_cased."""
        assert controller_name_for(TestMailController) == "test_mail"

    def test_explicit_controller_name(self):
        """Test a controller_name attribute wins."""
        assert controller_name_for(NewsletterDigest) == "digest"


class TestAreaDetection:
    """Tests for detect_area."""

    def test_area_from_module(self):
        """Test the module segment after 'areas' is the area."""
        assert detect_area(SupportMailer) == "support"

    def test_no_area(self):
        """Test mailers outside an areas package have no area."""
        assert detect_area(WelcomeMailer) is None

    def test_route_data(self):
        """Test route data carries the controller and area."""
        route_data = build_route_data(SupportMailer())

        assert route_data.controller == "support"
        assert route_data.data_tokens == {"area": "support"}

    def test_instance_overrides(self):
        """Test instance attributes override class-derived values."""
        mailer = WelcomeMailer()
        mailer.controller_name = "onboarding"
        mailer.area = "accounts"

        route_data = build_route_data(mailer)

        assert route_data.controller == "onboarding"
        assert route_data.area == "accounts"
