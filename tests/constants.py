ADMIN_HEADERS = {"X-User-ID": "admin-1", "X-User-Role": "ADMIN"}
USER_HEADERS = {"X-User-ID": "user-1"}
OTHER_USER_HEADERS = {"X-User-ID": "user-2"}
