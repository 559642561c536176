"""
Who may do what to a donation request.

Each (action, role) pair maps to a Rule:
  scope  - ANY: every request, OWN: only requests the caller created
  fields - writable fields for updates (None means all of them)

A missing pair means the action is denied for that role.
"""
from collections import namedtuple

from rest_framework.exceptions import PermissionDenied

from accounts.models import User

ANY = 'any'
OWN = 'own'

Rule = namedtuple('Rule', ['scope', 'fields', 'denied_message'])

UPDATE = 'update'
DELETE = 'delete'

POLICY = {
    (UPDATE, User.ROLE_ADMIN): Rule(ANY, None, None),
    (UPDATE, User.ROLE_VOLUNTEER): Rule(ANY, {'status'}, 'Volunteers can only update donation status'),
    (UPDATE, User.ROLE_DONOR): Rule(OWN, None, 'You can only update your own donation requests'),

    (DELETE, User.ROLE_ADMIN): Rule(ANY, None, None),
    (DELETE, User.ROLE_VOLUNTEER): Rule(OWN, None, 'You can only delete your own donation requests'),
    (DELETE, User.ROLE_DONOR): Rule(OWN, None, 'You can only delete your own donation requests'),
}


def check(action, caller, donation_request):
    """
    Evaluate the policy for ``caller`` acting on ``donation_request``.
    Returns the matching Rule; raises PermissionDenied otherwise.
    """
    rule = POLICY.get((action, caller.role))
    if rule is None:
        raise PermissionDenied("Access denied")
    if rule.scope == OWN and not donation_request.is_owned_by(caller):
        raise PermissionDenied(rule.denied_message or "Access denied")
    return rule


def restrict_fields(rule, data):
    """
    Drop fields the rule does not allow. Raises PermissionDenied when the
    rule is field-restricted and none of the allowed fields were supplied
    with a value.
    """
    if rule.fields is None:
        return dict(data)
    allowed = {k: v for k, v in data.items() if k in rule.fields and v not in (None, '')}
    if not allowed:
        raise PermissionDenied(rule.denied_message or "Access denied")
    return allowed
