"""Shared test fixtures."""

import logging
import pytest
from pathlib import Path
import tempfile

import jinja2

from view_mailer.mailer import MailerBase
from view_mailer.senders import MemoryMailSender
from view_mailer.view_engines import JinjaViewEngine, engines


class ExampleMailer(MailerBase):
    """Mailer with no emails of its own, used to call ``email`` directly."""

    pass


class OrderMailController(MailerBase):
    """Mailer exposing one method per email, the way applications write them."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.from_address = "no-reply@mysite.com"

    def test_mail(self):
        self.to.append("customer@example.com")
        self.subject = "Your order"
        return self.email("test_view")

    def test_master(self):
        return self.email("test_view", master_name="test_master")


def make_dict_engine(templates):
    return JinjaViewEngine(loader=jinja2.DictLoader(templates))


@pytest.fixture
def dict_engine():
    """Factory for view engines backed by in-memory templates."""
    return make_dict_engine


@pytest.fixture
def mailer_class():
    """Mailer class without emails of its own, for tests that build their own mailer."""
    return ExampleMailer


@pytest.fixture
def order_mailer():
    return OrderMailController()


@pytest.fixture
def package_logger():
    """Restore the view_mailer logger after setup_logging reconfigures it."""
    logger = logging.getLogger("view_mailer")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def view_engines():
    """Clear the global view engine registry for the duration of a test."""
    saved = list(engines)
    engines.clear()
    yield engines
    engines[:] = saved


@pytest.fixture
def text_engine():
    return make_dict_engine(
        {
            "shared/test_view.txt.jinja2": "TextView\n",
            "shared/test_master.txt.jinja2": "{% block content %}{% endblock %}",
        }
    )


@pytest.fixture
def utf8_engine():
    return make_dict_engine({"shared/test_view.txt.jinja2": "Umlauts are Über!"})


@pytest.fixture
def multipart_engine():
    return make_dict_engine(
        {
            "shared/test_view.txt.jinja2": "TextView",
            "shared/test_view.html.jinja2": "<html><body>HtmlView</body></html>",
        }
    )


@pytest.fixture
def mail_sender():
    return MemoryMailSender()


@pytest.fixture
def mailer(mail_sender):
    """A mailer with a sender address, ready to compose."""
    mailer = ExampleMailer(mail_sender=mail_sender)
    mailer.from_address = "no-reply@mysite.com"
    return mailer


@pytest.fixture
def temp_views_dir():
    """Create a temporary views directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def sample_views(temp_views_dir):
    """Create a views directory with controller, shared and area views."""
    views_dir = Path(temp_views_dir)

    files = {
        "welcome/signup.txt.jinja2": "Hello {{ model.name }}!\n",
        "welcome/signup.html.jinja2": (
            "{% extends layout %}\n"
            "{% block content %}<h1>Hello {{ model.name }}!</h1>{% endblock %}\n"
        ),
        "shared/layout.html.jinja2": (
            "<html><body>{% block content %}{% endblock %}"
            "{% if company is defined %}<p>{{ company }}</p>{% endif %}</body></html>"
        ),
        "shared/layout.txt.jinja2": "{% block content %}{% endblock %}",
        "shared/footer.txt.jinja2": "Sent by {{ view_bag.company }}",
        "areas/billing/invoice/due.txt.jinja2": "Invoice {{ model.number }} is due",
        "areas/billing/shared/footer.txt.jinja2": "Billing department",
    }

    for name, content in files.items():
        path = views_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    return views_dir
