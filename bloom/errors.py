class AccessError(Exception):
    status_code = 400
    detail = "bad request"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)

class ResourceNotFound(AccessError):
    status_code = 404
    detail = "not found"

class AccessDenied(AccessError):
    status_code = 403
    detail = "forbidden"

class InvalidRole(AccessError):
    status_code = 400
    detail = "role must be 'viewer' or 'editor'"

class SelfMembershipRejected(AccessError):
    status_code = 400
    detail = "you are already the owner"

class StorageUnavailable(AccessError):
    status_code = 503
    detail = "storage unavailable"

class Conflict(AccessError):
    status_code = 409
    detail = "conflict"
