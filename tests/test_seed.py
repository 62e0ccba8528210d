"""Tests for the sample data loader."""

from contract_manager.db.models import ContractAuditLogModel, ContractModel
from contract_manager.seed import BLUEPRINTS, SAMPLE_CONTRACTS, seed
from contract_manager.services.blueprints import BlueprintService


def test_seed_creates_blueprints_and_contracts(db_session):
    counts = seed(db_session)

    assert counts == {
        "blueprints": len(BLUEPRINTS),
        "contracts": len(SAMPLE_CONTRACTS),
        "transitions": sum(len(s.path) for s in SAMPLE_CONTRACTS),
    }
    names = {b.name for b in BlueprintService(db_session).list()}
    assert names == set(BLUEPRINTS)


def test_seeded_contracts_follow_lifecycle(db_session):
    seed(db_session)

    statuses = {c.name: c.status for c in db_session.query(ContractModel).all()}
    assert statuses == {
        "NDA - TechCorp Partnership": "SIGNED",
        "Employment - John Doe": "APPROVED",
        "Service - Website Development": "CREATED",
    }
    assert db_session.query(ContractAuditLogModel).count() == 4
