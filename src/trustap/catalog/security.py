"""Declared security schemes per catalog path and HTTP verb.

``APIKey`` endpoints accept HTTP Basic with the API key as username;
``OAuth2`` endpoints accept a user access token. Some endpoints that accept
an API key are published without it (``/p2p/charge``, ``/guest_users``); the
auth resolver covers those with path-suffix rules.
"""

SECURITY_MAP = {
    "/charge": {"GET": ["APIKey"]},
    "/transactions": {"POST": ["OAuth2"], "PUT": ["OAuth2"]},
    "/transactions/{transactionId}": {"GET": ["APIKey", "OAuth2"]},
    "/transactions/{transactionId}/description": {"PATCH": ["OAuth2"]},
    "/transactions/{transactionId}/cancel": {"POST": ["OAuth2"]},
    "/transactions/{transactionId}/track": {"POST": ["OAuth2"], "DELETE": ["OAuth2"]},
    "/transactions/{transactionId}/confirm_delivery": {"POST": ["OAuth2"]},
    "/transactions/{transactionId}/complain": {"POST": ["OAuth2"]},
    "/guest_users": {"POST": []},
    "/carriers": {"GET": ["APIKey"]},
    "/carriers/{carrier_id}/facility_options": {"POST": ["APIKey"]},
    "/p2p/charge": {"GET": []},
    "/p2p/transactions": {"POST": ["OAuth2"]},
    "/p2p/transactions/{transactionId}": {"GET": ["APIKey", "OAuth2"]},
    "/p2p/transactions/{transactionId}/confirm_handover": {"POST": ["OAuth2"]},
    "/users/{userId}": {"GET": ["OAuth2"], "PUT": ["OAuth2"]},
    "/me/transactions": {"GET": ["OAuth2"]},
}
