import pytest

from affiliate import create_app
from affiliate.cli import seed_demo_data
from affiliate.extensions import db
from affiliate.models import Site, User

DOMAIN_MAPPINGS = {
    "localhost": "demo-gaming",
    "thegaminghubguide.com": "demo-gaming",
    "glowpicks.com": "demo-beauty",
    "demo-beauty.localhost": "demo-beauty",
}

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-password"
OWNER_EMAIL = "owner@example.com"
OWNER_PASSWORD = "owner-password"


@pytest.fixture
def app(tmp_path):
    app = create_app(
        "testing",
        {
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test.db'}",
            "UPLOAD_FOLDER": str(tmp_path / "uploads"),
            "DOMAIN_MAPPINGS": DOMAIN_MAPPINGS,
        },
    )
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded(app):
    """Demo niches, two sites, products, an article, an admin and a gaming-site owner."""
    seed_demo_data(ADMIN_EMAIL, ADMIN_PASSWORD)

    gaming = Site.query.filter_by(slug="demo-gaming").one()
    owner = User(email=OWNER_EMAIL, name="Owner", role="OWNER")
    owner.set_password(OWNER_PASSWORD)
    owner.sites = [gaming]
    db.session.add(owner)
    db.session.commit()

    return {
        "gaming": gaming,
        "beauty": Site.query.filter_by(slug="demo-beauty").one(),
        "owner": owner,
    }


def _login(client, email, password):
    response = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.get_json()
    return {"Authorization": f"Bearer {response.get_json()['access_token']}"}


@pytest.fixture
def admin_headers(client, seeded):
    return _login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def owner_headers(client, seeded):
    return _login(client, OWNER_EMAIL, OWNER_PASSWORD)
