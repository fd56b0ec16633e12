"""Map an admin-supplied display name to a SyntheticCustomer.

Best-effort grouping, not strict identity: the first token of the name is
matched exactly (case-sensitive) against existing synthetic customers, so
two different "John"s share one placeholder and "john" does not match
"John".
"""

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ratings.customers.synthetic import DEFAULT_LAST_NAME, SYNTHETIC_MARKER, SyntheticCustomer

logger = structlog.get_logger(__name__)


def split_display_name(display_name):
    """Return ``(first_name, last_name)``; last name defaults to "Customer"."""
    tokens = (display_name or "").split()
    if not tokens:
        raise ValidationError({"display_name": ["Display name must contain at least one word"]})
    return tokens[0], " ".join(tokens[1:]) or DEFAULT_LAST_NAME


def resolve_synthetic_customer(display_name, resolved=None):
    """Return the id of a synthetic customer for ``display_name``, creating one if needed.

    ``resolved`` maps first names to ids already resolved in the current unit
    of work, so a batch reuses placeholders it created itself before commit.
    """
    first_name, last_name = split_display_name(display_name)
    if resolved is not None and first_name in resolved:
        return resolved[first_name]

    repo = current_domain.repository_for(SyntheticCustomer)
    existing = repo._dao.query.filter(first_name=first_name, marker=SYNTHETIC_MARKER).limit(1).all().items
    if existing:
        customer_id = str(existing[0].id)
    else:
        customer = SyntheticCustomer.create(first_name=first_name, last_name=last_name)
        repo.add(customer)
        customer_id = str(customer.id)
        logger.info("synthetic_customer_created", customer_id=customer_id, first_name=first_name)

    if resolved is not None:
        resolved[first_name] = customer_id
    return customer_id
