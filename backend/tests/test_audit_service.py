"""Tests for AuditLogRepository and AuditService."""

from uuid import uuid4

import pytest

from app.repositories.audit_log_repository import AuditLogRepository
from app.schemas.audit_log import AuditLogResponse
from app.services.audit_service import AuditService


@pytest.fixture
def repo(db_session):
    """Create an AuditLogRepository instance."""
    return AuditLogRepository(db_session)


@pytest.fixture
def service(db_session):
    """Create an AuditService instance."""
    return AuditService(db_session)


class TestAuditService:
    def test_log_create(self, service, repo, tenant_id):
        resource_id = uuid4()

        service.log_create("promo_code", resource_id, tenant_id, data={"code": "SAVE10"})

        logs = repo.get_by_resource(tenant_id, "promo_code", resource_id)
        assert len(logs) == 1
        assert logs[0].action == "created"
        assert logs[0].changes == {"code": "SAVE10"}
        assert logs[0].actor_type == "system"
        assert logs[0].actor_id is None

    def test_log_update_records_only_changes(self, service, repo, tenant_id):
        resource_id = uuid4()

        service.log_update(
            "promo_code",
            resource_id,
            tenant_id,
            actor_type="cook",
            actor_id="cook-1",
            old_data={"discount_value": 10, "max_uses": 0},
            new_data={"discount_value": 10, "max_uses": 50},
        )

        log = repo.get_by_resource(tenant_id, "promo_code", resource_id)[0]
        assert log.changes == {"max_uses": {"old": 0, "new": 50}}
        assert log.actor_id == "cook-1"

    def test_log_update_without_changes(self, service, repo, tenant_id):
        resource_id = uuid4()

        service.log_update(
            "promo_code", resource_id, tenant_id, old_data={"a": 1}, new_data={"a": 1}
        )

        assert repo.get_by_resource(tenant_id, "promo_code", resource_id) == []

    def test_log_status_change(self, service, repo, tenant_id):
        resource_id = uuid4()

        service.log_status_change("promo_code", resource_id, tenant_id, "active", "inactive")

        log = repo.get_all(tenant_id, action="status_changed")[0]
        assert log.changes == {"status": {"old": "active", "new": "inactive"}}


class TestAuditLogRepository:
    def test_get_all_scoped_by_tenant(self, service, repo, tenant_id, other_tenant_id):
        service.log_create("promo_code", uuid4(), tenant_id)
        service.log_create("promo_code", uuid4(), other_tenant_id)

        assert len(repo.get_all(tenant_id)) == 1
        assert len(repo.get_all(other_tenant_id)) == 1

    def test_filter_by_resource_type(self, service, repo, tenant_id):
        service.log_create("promo_code", uuid4(), tenant_id)
        service.log_create("tenant", uuid4(), tenant_id)

        logs = repo.get_all(tenant_id, resource_type="tenant")

        assert [log.resource_type for log in logs] == ["tenant"]

    def test_response_schema(self, service, repo, tenant_id):
        service.log_create("promo_code", uuid4(), tenant_id, data={"code": "X1Y"})

        response = AuditLogResponse.model_validate(repo.get_all(tenant_id)[0])

        assert response.tenant_id == tenant_id
        assert response.changes == {"code": "X1Y"}
