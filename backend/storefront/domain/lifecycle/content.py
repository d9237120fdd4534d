from typing import Dict, Set

# Detail-row statuses that are visible on the public site, per module.
# Blocks have no lifecycle.
PUBLIC_STATUSES: Dict[str, Set[str]] = {
    "pages": {"published"},
    "posts": {"published"},
    "products": {"active", "draft"},
    "classifieds": {"approved"},
}
