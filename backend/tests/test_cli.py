import json

from affiliate.cli import generate_domain_mappings, seed_demo_data
from affiliate.models import Niche, Product, Site, User


def test_seed_is_idempotent(app, seeded):
    assert seed_demo_data("admin@example.com", "admin-password") == []
    assert Site.query.count() == 2
    assert Niche.query.count() == 2
    assert User.query.filter_by(role="ADMIN").count() == 1


def test_seeded_niches_carry_layouts(app, seeded):
    niche = Niche.query.filter_by(slug="beauty").one()
    ids = [s["id"] for zone in niche.layout_config["zones"] for s in zone["sections"]]
    assert "ingredients" in ids
    assert Product.query.filter_by(site_id=seeded["beauty"].id).count() == 1


def test_generate_domain_mappings(app, seeded, tmp_path):
    path = tmp_path / "domain-mappings.json"
    mappings = generate_domain_mappings(str(path))

    assert json.loads(path.read_text()) == mappings
    assert mappings["thegaminghubguide.com"] == "demo-gaming"
    assert mappings["glowpicks.com"] == "demo-beauty"
    assert mappings["demo-beauty.localhost"] == "demo-beauty"
    assert mappings["localhost"] in {"demo-gaming", "demo-beauty"}


def test_generate_command(app, seeded, tmp_path):
    path = tmp_path / "out.json"
    result = app.test_cli_runner().invoke(args=["generate-domain-mappings", "--output", str(path)])
    assert result.exit_code == 0
    assert "domain mappings" in result.output
    assert path.exists()
