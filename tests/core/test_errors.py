"""Error Hierarchy — codes, statuses and the REST envelope."""

from canteen.core.errors import (
    CanteenError, InvalidParametersError, QuotaExceededError,
    StorageUnavailableError, TicketCollisionError, UnauthorizedError,
    WorkerNotFoundError,
)


def test_quota_exceeded_carries_limits():
    err = QuotaExceededError(max_daily=1, already_ordered=1)
    body = err.to_response()["error"]
    assert err.http_status == 409
    assert body["code"] == "QUOTA_EXCEEDED"
    assert body["details"] == {"max_daily": 1, "already_ordered": 1}


def test_worker_not_found_is_404():
    err = WorkerNotFoundError("12345678K")
    assert err.http_status == 404
    assert err.code == "WORKER_NOT_FOUND"
    assert err.context.identity_key == "12345678K"


def test_status_codes():
    assert InvalidParametersError("x").http_status == 400
    assert UnauthorizedError().http_status == 401
    assert StorageUnavailableError("down", "connect").http_status == 503
    assert TicketCollisionError(attempts=2).http_status == 500


def test_all_errors_share_base():
    for err in (
        InvalidParametersError("x"), UnauthorizedError(),
        TicketCollisionError(attempts=2),
    ):
        assert isinstance(err, CanteenError)


def test_envelope_has_timestamp_and_category():
    body = UnauthorizedError().to_response()["error"]
    assert body["category"] == "authentication"
    assert body["timestamp"]
