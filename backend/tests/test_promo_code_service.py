"""Tests for promo code management rules."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from app.models.audit_log import AuditLog
from app.models.promo_code import PromoCodeDisplayStatus, PromoCodeStatus
from app.schemas.promo_code import PromoCodeCreate, PromoCodeUpdate
from app.services.promo_code_service import PromoCodeService


@pytest.fixture
def service(db_session):
    return PromoCodeService(db_session)


def _create_data(today, **overrides):
    data = {
        "code": "welcome10",
        "discount_type": "percentage",
        "discount_value": 10,
        "starts_at": today,
    }
    data.update(overrides)
    return PromoCodeCreate(**data)


def _update_data(promo_code, **overrides):
    data = {
        "discount_value": promo_code.discount_value,
        "minimum_order_amount": promo_code.minimum_order_amount,
        "max_uses": promo_code.max_uses,
        "max_uses_per_client": promo_code.max_uses_per_client,
        "starts_at": promo_code.starts_at,
        "ends_at": promo_code.ends_at,
    }
    data.update(overrides)
    return PromoCodeUpdate(**data)


class TestPromoCodeSchemas:
    def test_code_too_short(self, today):
        with pytest.raises(ValidationError):
            _create_data(today, code="AB")

    def test_code_too_long(self, today):
        with pytest.raises(ValidationError):
            _create_data(today, code="A" * 21)

    def test_code_must_be_alphanumeric(self, today):
        with pytest.raises(ValidationError):
            _create_data(today, code="SAVE-10")

    def test_percentage_over_100(self, today):
        with pytest.raises(ValidationError, match="between 1 and 100"):
            _create_data(today, discount_value=101)

    def test_fixed_allows_large_value(self, today):
        data = _create_data(today, discount_type="fixed", discount_value=100000)
        assert data.discount_value == 100000

    def test_fixed_over_max(self, today):
        with pytest.raises(ValidationError):
            _create_data(today, discount_type="fixed", discount_value=100001)

    def test_discount_value_at_least_one(self, today):
        with pytest.raises(ValidationError):
            _create_data(today, discount_type="fixed", discount_value=0)

    def test_limits(self, today):
        with pytest.raises(ValidationError):
            _create_data(today, max_uses_per_client=101)
        with pytest.raises(ValidationError):
            _create_data(today, max_uses=100001)
        with pytest.raises(ValidationError):
            _create_data(today, minimum_order_amount=100001)

    def test_end_before_start(self, today):
        with pytest.raises(ValidationError, match="end date"):
            _create_data(today, ends_at=today - timedelta(days=1))

    def test_end_on_start_allowed(self, today):
        assert _create_data(today, ends_at=today).ends_at == today

    def test_update_rejects_immutable_fields(self, today):
        with pytest.raises(ValidationError):
            PromoCodeUpdate(discount_value=10, starts_at=today, code="NEWNAME")
        with pytest.raises(ValidationError):
            PromoCodeUpdate(discount_value=10, starts_at=today, discount_type="fixed")


class TestCreatePromoCode:
    def test_create(self, service, tenant_id, client_id, today):
        promo_code = service.create_promo_code(
            tenant_id, _create_data(today, max_uses=50), actor_id=client_id, today=today
        )

        assert promo_code.code == "WELCOME10"
        assert promo_code.tenant_id == tenant_id
        assert promo_code.status == PromoCodeStatus.ACTIVE.value
        assert promo_code.times_used == 0
        assert promo_code.max_uses == 50
        assert promo_code.created_by == client_id

    def test_duplicate_within_tenant(self, service, tenant_id, today):
        service.create_promo_code(tenant_id, _create_data(today), today=today)

        with pytest.raises(ValueError, match="already exists"):
            service.create_promo_code(tenant_id, _create_data(today, code="WELCOME10"), today=today)

    def test_same_code_in_other_tenant(self, service, tenant_id, other_tenant_id, today):
        service.create_promo_code(tenant_id, _create_data(today), today=today)

        other = service.create_promo_code(other_tenant_id, _create_data(today), today=today)

        assert other.tenant_id == other_tenant_id

    def test_start_date_in_past(self, service, tenant_id, today):
        with pytest.raises(ValueError, match="today or later"):
            service.create_promo_code(
                tenant_id, _create_data(today, starts_at=today - timedelta(days=1)), today=today
            )

    def test_create_writes_audit_entry(self, service, db_session, tenant_id, client_id, today):
        promo_code = service.create_promo_code(
            tenant_id, _create_data(today), actor_id=client_id, today=today
        )

        log = db_session.query(AuditLog).one()
        assert log.action == "created"
        assert log.resource_type == "promo_code"
        assert log.resource_id == promo_code.id
        assert log.tenant_id == tenant_id
        assert log.actor_type == "cook"
        assert log.actor_id == str(client_id)
        assert log.changes["code"] == "WELCOME10"
        assert log.changes["discount_value"] == 10

    def test_labels(self, service, tenant_id, today):
        promo_code = service.create_promo_code(
            tenant_id, _create_data(today, max_uses=0, max_uses_per_client=2), today=today
        )

        assert promo_code.max_uses_label == "Unlimited"
        assert promo_code.max_uses_per_client_label == "2"


class TestListAndGet:
    def test_list_is_tenant_scoped(
        self, service, make_promo_code, tenant_id, other_tenant_id
    ):
        make_promo_code(code="MINE1")
        make_promo_code(code="MINE2", status=PromoCodeStatus.INACTIVE.value)
        make_promo_code(code="THEIRS", tenant_id=other_tenant_id)

        codes = {pc.code for pc in service.list_for_tenant(tenant_id)}

        assert codes == {"MINE1", "MINE2"}
        assert service.count_for_tenant(tenant_id) == 2

    def test_list_filters_by_status(self, service, make_promo_code, tenant_id):
        make_promo_code(code="MINE1")
        make_promo_code(code="MINE2", status=PromoCodeStatus.INACTIVE.value)

        active = service.list_for_tenant(tenant_id, status=PromoCodeStatus.ACTIVE)

        assert [pc.code for pc in active] == ["MINE1"]
        assert service.count_for_tenant(tenant_id, PromoCodeStatus.INACTIVE) == 1

    def test_get_other_tenant_returns_none(
        self, service, make_promo_code, tenant_id, other_tenant_id
    ):
        theirs = make_promo_code(code="THEIRS", tenant_id=other_tenant_id)

        assert service.get_for_tenant(tenant_id, theirs.id) is None
        assert service.get_for_tenant(other_tenant_id, theirs.id).code == "THEIRS"

    def test_usage_count(self, service, make_promo_code, record_usage, client_id, other_client_id):
        promo_code = make_promo_code(code="USED")
        record_usage(promo_code, client_id)
        record_usage(promo_code, other_client_id)

        assert service.usage_count(promo_code.id) == 2

    def test_status_on_expired(self, make_promo_code, today):
        promo_code = make_promo_code(
            code="OLD", starts_at=today - timedelta(days=10), ends_at=today - timedelta(days=1)
        )

        assert promo_code.status_on(today) == PromoCodeDisplayStatus.EXPIRED
        assert promo_code.status_on(today - timedelta(days=1)) == PromoCodeDisplayStatus.ACTIVE


class TestUpdatePromoCode:
    def test_update_editable_fields(self, service, make_promo_code, tenant_id, today):
        promo_code = make_promo_code(code="EDITME", discount_value=10)

        updated = service.update_promo_code(
            tenant_id,
            promo_code.id,
            _update_data(promo_code, discount_value=20, max_uses=10, minimum_order_amount=3000),
            today=today,
        )

        assert updated.discount_value == 20
        assert updated.max_uses == 10
        assert updated.minimum_order_amount == 3000
        assert updated.code == "EDITME"
        assert updated.discount_type == "percentage"

    def test_percentage_rechecked_on_update(self, service, make_promo_code, tenant_id, today):
        promo_code = make_promo_code(code="PCT")

        with pytest.raises(ValueError, match="between 1 and 100"):
            service.update_promo_code(
                tenant_id, promo_code.id, _update_data(promo_code, discount_value=150), today=today
            )

    def test_fixed_may_exceed_100(self, service, make_promo_code, tenant_id, today):
        promo_code = make_promo_code(code="FLAT", discount_type="fixed", discount_value=500)

        updated = service.update_promo_code(
            tenant_id, promo_code.id, _update_data(promo_code, discount_value=2500), today=today
        )

        assert updated.discount_value == 2500

    def test_max_uses_below_times_used_allowed(self, service, make_promo_code, tenant_id, today):
        promo_code = make_promo_code(code="BUSY", max_uses=100, times_used=40)

        updated = service.update_promo_code(
            tenant_id, promo_code.id, _update_data(promo_code, max_uses=10), today=today
        )

        assert updated.max_uses == 10
        assert updated.times_used == 40

    def test_started_code_cannot_move_start_forward(
        self, service, make_promo_code, tenant_id, today
    ):
        promo_code = make_promo_code(code="LIVE", starts_at=today - timedelta(days=2))

        with pytest.raises(ValueError, match="cannot be in the future"):
            service.update_promo_code(
                tenant_id,
                promo_code.id,
                _update_data(promo_code, starts_at=today + timedelta(days=1)),
                today=today,
            )

    def test_started_code_can_move_start_back(self, service, make_promo_code, tenant_id, today):
        promo_code = make_promo_code(code="LIVE", starts_at=today)

        updated = service.update_promo_code(
            tenant_id,
            promo_code.id,
            _update_data(promo_code, starts_at=today - timedelta(days=3)),
            today=today,
        )

        assert updated.starts_at == today - timedelta(days=3)

    def test_scheduled_code_cannot_move_start_into_past(
        self, service, make_promo_code, tenant_id, today
    ):
        promo_code = make_promo_code(code="SOON", starts_at=today + timedelta(days=5))

        with pytest.raises(ValueError, match="today or later"):
            service.update_promo_code(
                tenant_id,
                promo_code.id,
                _update_data(promo_code, starts_at=today - timedelta(days=1)),
                today=today,
            )

    def test_update_other_tenant_not_found(
        self, service, make_promo_code, tenant_id, other_tenant_id, today
    ):
        theirs = make_promo_code(code="THEIRS", tenant_id=other_tenant_id)

        with pytest.raises(ValueError, match="not found"):
            service.update_promo_code(tenant_id, theirs.id, _update_data(theirs), today=today)

    def test_update_audits_diff(self, service, db_session, make_promo_code, tenant_id, today):
        promo_code = make_promo_code(code="AUDITME", discount_value=10, max_uses=0)

        service.update_promo_code(
            tenant_id,
            promo_code.id,
            _update_data(promo_code, discount_value=15, max_uses=20),
            today=today,
        )

        log = db_session.query(AuditLog).filter(AuditLog.action == "updated").one()
        assert log.changes == {
            "discount_value": {"old": 10, "new": 15},
            "max_uses": {"old": 0, "new": 20},
        }
        assert log.actor_type == "system"

    def test_noop_update_not_audited(self, service, db_session, make_promo_code, tenant_id, today):
        promo_code = make_promo_code(code="SAME")

        service.update_promo_code(tenant_id, promo_code.id, _update_data(promo_code), today=today)

        assert db_session.query(AuditLog).count() == 0


class TestToggleStatus:
    def test_toggle_round_trip(self, service, db_session, make_promo_code, tenant_id, client_id):
        promo_code = make_promo_code(code="FLIP")

        assert service.toggle_status(tenant_id, promo_code.id, client_id).status == "inactive"
        assert service.toggle_status(tenant_id, promo_code.id, client_id).status == "active"

        logs = db_session.query(AuditLog).filter(AuditLog.action == "status_changed").all()
        assert len(logs) == 2
        assert {log.changes["status"]["new"] for log in logs} == {"active", "inactive"}

    def test_toggle_does_not_touch_usage(self, service, make_promo_code, tenant_id):
        promo_code = make_promo_code(code="FLIP", times_used=7)

        toggled = service.toggle_status(tenant_id, promo_code.id)

        assert toggled.times_used == 7

    def test_toggle_other_tenant(self, service, make_promo_code, tenant_id, other_tenant_id):
        theirs = make_promo_code(code="THEIRS", tenant_id=other_tenant_id)

        with pytest.raises(ValueError, match="not found"):
            service.toggle_status(tenant_id, theirs.id)
