"""Operation catalog: operation id -> catalog-relative path and HTTP verb.

Paths are relative to the API base path (``/api/v4`` by default). Operation
ids are namespaced by the transaction flow they belong to: ``basic.*`` for
online transactions, ``p2p.*`` for face-to-face transactions and
``oauth.*`` for user-scoped endpoints.
"""

OPERATION_ID_TO_PATH = {
    # --- Online transactions ---
    "basic.getCharge": {"path": "/charge", "method": "get"},
    "basic.createTransaction": {"path": "/transactions", "method": "post"},
    "basic.joinTransaction": {"path": "/transactions", "method": "put"},
    "basic.getTransaction": {"path": "/transactions/{transactionId}", "method": "get"},
    "basic.updateTransactionDescription": {
        "path": "/transactions/{transactionId}/description",
        "method": "patch",
    },
    "basic.cancelTransaction": {"path": "/transactions/{transactionId}/cancel", "method": "post"},
    "basic.setTrackingDetails": {"path": "/transactions/{transactionId}/track", "method": "post"},
    "basic.removeTrackingDetails": {"path": "/transactions/{transactionId}/track", "method": "delete"},
    "basic.confirmDelivery": {
        "path": "/transactions/{transactionId}/confirm_delivery",
        "method": "post",
    },
    "basic.complain": {"path": "/transactions/{transactionId}/complain", "method": "post"},
    "basic.createGuestUser": {"path": "/guest_users", "method": "post"},
    "basic.getCarriers": {"path": "/carriers", "method": "get"},
    "basic.getCarrierFacilityOptions": {
        "path": "/carriers/{carrier_id}/facility_options",
        "method": "post",
    },
    # --- Face-to-face transactions ---
    "p2p.getCharge": {"path": "/p2p/charge", "method": "get"},
    "p2p.createTransaction": {"path": "/p2p/transactions", "method": "post"},
    "p2p.getTransaction": {"path": "/p2p/transactions/{transactionId}", "method": "get"},
    "p2p.confirmHandover": {
        "path": "/p2p/transactions/{transactionId}/confirm_handover",
        "method": "post",
    },
    # --- User-scoped ---
    "oauth.getUser": {"path": "/users/{userId}", "method": "get"},
    "oauth.updateUser": {"path": "/users/{userId}", "method": "put"},
    "oauth.getMyTransactions": {"path": "/me/transactions", "method": "get"},
}
