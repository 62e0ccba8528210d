"""Tests for ContractService: creation, value upserts and transitions."""

import pytest
from sqlalchemy import func, text

from contract_manager.db.models import (
    ContractAuditLogModel,
    ContractModel,
    ContractValueModel,
)
from contract_manager.enums import ContractStatus
from contract_manager.schemas.contract import (
    ContractCreate,
    ContractStatusUpdate,
    ContractValueInput,
    ContractValuesUpdate,
)
from contract_manager.services.contracts import ContractService
from contract_manager.services.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)

S = ContractStatus


def field_ids(blueprint):
    return {f.label: f.id for f in blueprint.fields}


def value(field_id, text_value):
    return ContractValueInput(field_id=field_id, value=text_value)


def count(db, model):
    return db.query(func.count()).select_from(model).scalar()


@pytest.fixture
def service(db_session):
    return ContractService(db_session)


@pytest.fixture
def blueprint(make_blueprint):
    return make_blueprint()


@pytest.fixture
def contract(service, blueprint):
    ids = field_ids(blueprint)
    return service.create(
        ContractCreate(
            name="Acme NDA",
            blueprint_id=blueprint.id,
            values=[value(ids["Company"], "Acme Inc")],
        )
    )


def advance(service, contract_id, *statuses):
    for status in statuses:
        service.update_status(contract_id, ContractStatusUpdate(status=status))


class TestCreate:
    """Contract creation validates values against the blueprint."""

    def test_create_sets_created_status(self, contract, blueprint):
        assert contract.status == S.CREATED.value
        assert contract.blueprint_id == blueprint.id
        assert [v.value for v in contract.values] == ["Acme Inc"]

    def test_unknown_blueprint(self, service, db_session):
        with pytest.raises(NotFoundError) as exc:
            service.create(ContractCreate(name="x", blueprint_id="missing"))
        assert exc.value.message == "Blueprint not found"
        assert count(db_session, ContractModel) == 0

    def test_missing_required_field_names_label(self, service, blueprint, db_session):
        ids = field_ids(blueprint)
        with pytest.raises(ValidationError) as exc:
            service.create(
                ContractCreate(
                    name="x",
                    blueprint_id=blueprint.id,
                    values=[value(ids["Notes"], "only notes")],
                )
            )
        assert exc.value.message == "Missing required fields: Company"
        assert count(db_session, ContractModel) == 0
        assert count(db_session, ContractValueModel) == 0

    def test_whitespace_does_not_satisfy_required(self, service, blueprint):
        ids = field_ids(blueprint)
        with pytest.raises(ValidationError):
            service.create(
                ContractCreate(
                    name="x",
                    blueprint_id=blueprint.id,
                    values=[value(ids["Company"], "   ")],
                )
            )

    def test_field_from_other_blueprint_rejected(
        self, service, blueprint, make_blueprint, db_session
    ):
        other = make_blueprint(name="Other")
        foreign = field_ids(other)["Company"]
        ids = field_ids(blueprint)
        with pytest.raises(ValidationError) as exc:
            service.create(
                ContractCreate(
                    name="x",
                    blueprint_id=blueprint.id,
                    values=[value(ids["Company"], "Acme"), value(foreign, "Evil")],
                )
            )
        assert exc.value.message == f"Invalid field IDs: {foreign}"
        assert count(db_session, ContractModel) == 0

    def test_duplicate_field_id_keeps_last(self, service, blueprint):
        ids = field_ids(blueprint)
        contract = service.create(
            ContractCreate(
                name="x",
                blueprint_id=blueprint.id,
                values=[value(ids["Company"], "First"), value(ids["Company"], "Second")],
            )
        )
        assert [v.value for v in contract.values] == ["Second"]


class TestUpdateValues:
    """Value upserts keep one row per (contract, field)."""

    def test_upsert_never_duplicates(self, service, contract, blueprint, db_session):
        ids = field_ids(blueprint)
        for n in range(3):
            service.update_values(
                contract.id,
                ContractValuesUpdate(values=[value(ids["Company"], f"Acme {n}")]),
            )
        rows = (
            db_session.query(ContractValueModel)
            .filter(ContractValueModel.field_id == ids["Company"])
            .all()
        )
        assert len(rows) == 1
        assert rows[0].value == "Acme 2"

    def test_stored_required_value_may_be_omitted(self, service, contract, blueprint):
        ids = field_ids(blueprint)
        updated = service.update_values(
            contract.id, ContractValuesUpdate(values=[value(ids["Notes"], "hello")])
        )
        stored = {v.field_id: v.value for v in updated.values}
        assert stored == {ids["Company"]: "Acme Inc", ids["Notes"]: "hello"}

    def test_required_value_cannot_be_blanked(self, service, contract, blueprint, db_session):
        ids = field_ids(blueprint)
        with pytest.raises(ValidationError) as exc:
            service.update_values(
                contract.id, ContractValuesUpdate(values=[value(ids["Company"], "")])
            )
        assert exc.value.message == "Missing required fields: Company"
        db_session.expire_all()
        assert service.require(contract.id).values[0].value == "Acme Inc"

    def test_batch_is_all_or_nothing(
        self, service, contract, blueprint, db_session, session_factory
    ):
        ids = field_ids(blueprint)
        assert len(contract.values) == 1

        # Another writer fills Notes after this session loaded the contract
        other = session_factory()
        other.add(
            ContractValueModel(
                contract_id=contract.id, field_id=ids["Notes"], value="theirs"
            )
        )
        other.commit()
        other.close()

        with pytest.raises(ConflictError):
            service.update_values(
                contract.id,
                ContractValuesUpdate(
                    values=[value(ids["Company"], "NEW"), value(ids["Notes"], "mine")]
                ),
            )

        stored = {v.field_id: v.value for v in service.require(contract.id).values}
        assert stored == {ids["Company"]: "Acme Inc", ids["Notes"]: "theirs"}

    def test_invalid_field_id(self, service, contract):
        with pytest.raises(ValidationError) as exc:
            service.update_values(
                contract.id, ContractValuesUpdate(values=[value("nope", "x")])
            )
        assert exc.value.message == "Invalid field IDs: nope"

    @pytest.mark.parametrize(
        "path",
        [
            (S.APPROVED, S.SENT, S.SIGNED, S.LOCKED),
            (S.REVOKED,),
        ],
    )
    def test_terminal_contract_is_frozen(self, service, contract, blueprint, path):
        advance(service, contract.id, *path)
        ids = field_ids(blueprint)
        with pytest.raises(ValidationError) as exc:
            service.update_values(
                contract.id, ContractValuesUpdate(values=[value(ids["Notes"], "late")])
            )
        assert exc.value.message.startswith(
            "Cannot modify values of a locked or revoked contract"
        )

    def test_unknown_contract(self, service):
        with pytest.raises(NotFoundError):
            service.update_values("missing", ContractValuesUpdate(values=[]))


class TestUpdateStatus:
    """Transitions follow the lifecycle table and are audited."""

    def test_happy_path_records_prior_status(self, service, contract):
        advance(service, contract.id, S.APPROVED, S.SENT, S.SIGNED, S.LOCKED)

        assert service.require(contract.id).status == S.LOCKED.value
        logs = service.get_audit_logs(contract.id)
        assert [(e.from_status, e.to_status) for e in logs] == [
            ("SIGNED", "LOCKED"),
            ("SENT", "SIGNED"),
            ("APPROVED", "SENT"),
            ("CREATED", "APPROVED"),
        ]

    def test_reason_is_recorded(self, service, contract):
        service.update_status(
            contract.id, ContractStatusUpdate(status=S.REVOKED, reason="Deal fell through")
        )
        (entry,) = service.get_audit_logs(contract.id)
        assert entry.reason == "Deal fell through"
        assert entry.from_status == "CREATED"

    def test_skipping_a_step_lists_allowed(self, service, contract, db_session):
        with pytest.raises(ValidationError) as exc:
            service.update_status(contract.id, ContractStatusUpdate(status=S.SENT))
        assert exc.value.message == (
            "Invalid transition from CREATED to SENT. "
            "Allowed transitions: APPROVED, REVOKED"
        )
        assert service.require(contract.id).status == S.CREATED.value
        assert count(db_session, ContractAuditLogModel) == 0

    def test_signed_cannot_be_revoked(self, service, contract):
        advance(service, contract.id, S.APPROVED, S.SENT, S.SIGNED)
        with pytest.raises(ValidationError) as exc:
            service.update_status(contract.id, ContractStatusUpdate(status=S.REVOKED))
        assert exc.value.message.endswith("Allowed transitions: LOCKED")

    def test_revoked_rejects_everything(self, service, contract, db_session):
        advance(service, contract.id, S.REVOKED)
        for requested in ContractStatus:
            with pytest.raises(ValidationError) as exc:
                service.update_status(contract.id, ContractStatusUpdate(status=requested))
            assert exc.value.message == (
                "Cannot transition from terminal status: REVOKED"
            )
        assert count(db_session, ContractAuditLogModel) == 1

    def test_locked_rejects_revoke(self, service, contract):
        advance(service, contract.id, S.APPROVED, S.SENT, S.SIGNED, S.LOCKED)
        with pytest.raises(ValidationError) as exc:
            service.update_status(contract.id, ContractStatusUpdate(status=S.REVOKED))
        assert exc.value.message == "Cannot transition from terminal status: LOCKED"

    def test_concurrent_change_conflicts(self, service, contract, db_session):
        # Status moves underneath the loaded instance
        db_session.execute(
            text("UPDATE contracts SET status = 'REVOKED' WHERE id = :id"),
            {"id": contract.id},
        )
        with pytest.raises(ConflictError):
            service.update_status(contract.id, ContractStatusUpdate(status=S.APPROVED))
        assert count(db_session, ContractAuditLogModel) == 0

    def test_unknown_contract(self, service):
        with pytest.raises(NotFoundError) as exc:
            service.update_status("missing", ContractStatusUpdate(status=S.APPROVED))
        assert exc.value.message == "Contract not found"


class TestDelete:
    def test_delete_removes_values(self, service, contract, db_session):
        service.delete(contract.id)
        assert service.get(contract.id) is None
        assert count(db_session, ContractValueModel) == 0

    def test_audit_trail_survives_delete(self, service, contract):
        advance(service, contract.id, S.APPROVED)
        service.delete(contract.id)
        assert len(service.get_audit_logs(contract.id)) == 1

    def test_terminal_contract_cannot_be_deleted(self, service, contract):
        advance(service, contract.id, S.REVOKED)
        with pytest.raises(ValidationError) as exc:
            service.delete(contract.id)
        assert exc.value.message == (
            "Cannot delete a locked or revoked contract (status: REVOKED)"
        )
        assert service.get(contract.id) is not None


class TestList:
    def test_filters(self, service, contract, blueprint, make_blueprint):
        other = make_blueprint(name="Other")
        second = service.create(
            ContractCreate(
                name="Other contract",
                blueprint_id=other.id,
                values=[value(field_ids(other)["Company"], "Beta")],
            )
        )
        advance(service, second.id, S.APPROVED)

        assert {c.id for c in service.list()} == {contract.id, second.id}
        assert [c.id for c in service.list(status="APPROVED")] == [second.id]
        assert [c.id for c in service.list(blueprint_id=blueprint.id)] == [contract.id]

    def test_unknown_audit_contract_is_empty(self, service):
        assert service.get_audit_logs("missing") == []
