from pathlib import Path

from agro.utilities.config import SESSION_FILE

# Centralized paths for data files (single source of truth)
DATA_DIR = (Path(__file__).parent.parent / 'data').resolve()
SEED_FILE = DATA_DIR / 'seed.json'
CATALOG_FILE = DATA_DIR / 'catalog.json'
COMMUNITY_FILE = DATA_DIR / 'community.json'
FAQ_FILE = DATA_DIR / 'faq.json'

__all__ = ['DATA_DIR', 'SEED_FILE', 'CATALOG_FILE', 'COMMUNITY_FILE', 'FAQ_FILE', 'SESSION_FILE']
