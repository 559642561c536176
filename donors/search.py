"""
Donor search with graceful degradation.

The exact query applies every supplied filter. When it finds nobody, the
filters are relaxed step by step (see STRATEGIES) and the first step that
finds someone wins. Callers show the returned ``message`` so users know
they are looking at near matches rather than exact ones.
"""
import logging
from collections import namedtuple

from django.contrib.auth import get_user_model

from donorhub.pagination import paginate

User = get_user_model()
logger = logging.getLogger(__name__)

ELIGIBLE_ROLES = (User.ROLE_DONOR, User.ROLE_VOLUNTEER, User.ROLE_ADMIN)

SEARCH_EXACT = 'exact'
SEARCH_ALTERNATIVE = 'alternative'

Criteria = namedtuple('Criteria', ['blood_group', 'district', 'upazila'])

SearchResult = namedtuple('SearchResult', ['donors', 'message', 'search_type', 'criteria'])


class Strategy:
    """One relaxation step: when it applies, which filters it keeps, how it reads."""

    def __init__(self, name, applies, fields, describe):
        self.name = name
        self.applies = applies
        self.fields = fields
        self.describe = describe

    def filters(self, criteria):
        return {field: value for field, value in self.fields(criteria).items() if value}


def _location(c):
    return f"{c.district}, {c.upazila}" if c.upazila else c.district


STRATEGIES = [
    Strategy(
        'blood_group_and_district',
        applies=lambda c: bool(c.blood_group and c.district),
        fields=lambda c: {'blood_group': c.blood_group, 'district': c.district},
        describe=lambda c, n: f"Found {n} donor(s) in {c.district} with blood group {c.blood_group}",
    ),
    Strategy(
        'blood_group',
        applies=lambda c: bool(c.blood_group),
        fields=lambda c: {'blood_group': c.blood_group},
        describe=lambda c, n: f"Found {n} donor(s) with blood group {c.blood_group}",
    ),
    Strategy(
        'location',
        applies=lambda c: bool(c.district),
        fields=lambda c: {'district': c.district, 'upazila': c.upazila},
        describe=lambda c, n: f"Found {n} donor(s) in {_location(c)}",
    ),
    Strategy(
        'all_active',
        applies=lambda c: True,
        fields=lambda c: {},
        describe=lambda c, n: f"Showing all {n} active donor(s)",
    ),
]


def _clean(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def eligible_donors():
    return (
        User.objects.filter(status=User.STATUS_ACTIVE, role__in=ELIGIBLE_ROLES)
        .order_by('-created_at')
    )


def _query(filters, page, limit):
    # Case-insensitive equality, never substring matching
    lookups = {f"{field}__iexact": value for field, value in filters.items()}
    return paginate(eligible_donors().filter(**lookups), page, limit)


def search(blood_group=None, district=None, upazila=None, page=1, limit=10):
    """
    Find active donors, relaxing the filters when nothing matches exactly.
    Returns a SearchResult whose ``donors`` is a pagination Page.
    """
    criteria = Criteria(_clean(blood_group), _clean(district), _clean(upazila))
    exact_filters = {k: v for k, v in criteria._asdict().items() if v}

    donors = _query(exact_filters, page, limit)
    logger.info(f"Donor search {exact_filters or 'unfiltered'}: {len(donors)} exact match(es)")

    if len(donors):
        return SearchResult(
            donors,
            f"Found {len(donors)} donor(s) matching all criteria",
            SEARCH_EXACT,
            criteria,
        )

    for strategy in STRATEGIES:
        if not strategy.applies(criteria):
            continue
        alternative = _query(strategy.filters(criteria), page, limit)
        if len(alternative):
            logger.info(f"Donor search fell back to '{strategy.name}': {len(alternative)} result(s)")
            return SearchResult(
                alternative,
                strategy.describe(criteria, len(alternative)),
                SEARCH_ALTERNATIVE,
                criteria,
            )

    return SearchResult(donors, "No donors found", SEARCH_EXACT, criteria)
