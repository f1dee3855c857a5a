import json
import logging
import os

logger = logging.getLogger(__name__)


def load_domain_mappings(config):
    """Domain -> site slug table from ``DOMAIN_MAPPINGS`` or ``DOMAIN_MAPPINGS_FILE``."""
    inline = config.get("DOMAIN_MAPPINGS")
    if inline is not None:
        return {str(k).lower(): v for k, v in dict(inline).items()}

    path = config.get("DOMAIN_MAPPINGS_FILE")
    if not path or not os.path.exists(path):
        logger.info("No domain mappings file found at %s, using fallback site only", path)
        return {}

    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return {str(k).lower(): v for k, v in data.items()}


def build_domain_mappings(sites):
    """
    Build the static lookup table from active sites.

    ``sites`` is an ordered iterable of objects with ``slug`` and ``domain``.
    The first site also answers for plain ``localhost``, and every site is
    reachable locally as ``{slug}.localhost``.
    """
    mappings = {}
    sites = list(sites)
    if sites:
        mappings["localhost"] = sites[0].slug

    for site in sites:
        if site.domain:
            mappings[site.domain.lower()] = site.slug
        mappings[f"{site.slug}.localhost"] = site.slug

    return mappings


def write_domain_mappings(mappings, path):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(mappings, fh, indent=2, sort_keys=True)
        fh.write("\n")
