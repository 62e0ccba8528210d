"""
Sample data for development databases.

Blueprints and contracts are created through the services so the seeded
contracts pass the same validation as API traffic, and their lifecycle
history shows up in the audit log.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import structlog
from sqlalchemy.orm import Session

from .enums import ContractStatus, FieldType
from .schemas.blueprint import BlueprintCreate, BlueprintFieldCreate
from .schemas.contract import ContractCreate, ContractStatusUpdate, ContractValueInput
from .services.blueprints import BlueprintService
from .services.contracts import ContractService

logger = structlog.get_logger()

# (type, label, required)
FieldSpec = Tuple[FieldType, str, bool]

BLUEPRINTS: Dict[str, Tuple[str, List[FieldSpec]]] = {
    "Non-Disclosure Agreement": (
        "Standard NDA template for external partnerships",
        [
            (FieldType.TEXT, "Company Name", True),
            (FieldType.TEXT, "Counterparty Name", True),
            (FieldType.DATE, "Effective Date", True),
            (FieldType.TEXT, "Governing Law State", True),
            (FieldType.CHECKBOX, "Mutual NDA", False),
            (FieldType.SIGNATURE, "Company Representative Signature", True),
            (FieldType.SIGNATURE, "Counterparty Signature", True),
        ],
    ),
    "Employment Agreement": (
        "Standard employment contract template",
        [
            (FieldType.TEXT, "Employee Full Name", True),
            (FieldType.TEXT, "Job Title", True),
            (FieldType.DATE, "Start Date", True),
            (FieldType.TEXT, "Salary", True),
            (FieldType.CHECKBOX, "Full Time Position", True),
            (FieldType.SIGNATURE, "Employee Signature", True),
            (FieldType.SIGNATURE, "Employer Signature", True),
        ],
    ),
    "Service Agreement": (
        "Professional services contract template",
        [
            (FieldType.TEXT, "Service Provider", True),
            (FieldType.TEXT, "Client Name", True),
            (FieldType.TEXT, "Service Description", True),
            (FieldType.DATE, "Service Start Date", True),
            (FieldType.DATE, "Service End Date", False),
            (FieldType.TEXT, "Total Fee", True),
            (FieldType.SIGNATURE, "Service Provider Signature", True),
            (FieldType.SIGNATURE, "Client Signature", True),
        ],
    ),
}


@dataclass
class SampleContract:
    name: str
    blueprint: str
    # Values by field label
    values: Dict[str, str]
    # Transitions replayed after creation
    path: List[ContractStatus] = field(default_factory=list)


SAMPLE_CONTRACTS: List[SampleContract] = [
    SampleContract(
        name="NDA - TechCorp Partnership",
        blueprint="Non-Disclosure Agreement",
        values={
            "Company Name": "Acme Inc",
            "Counterparty Name": "TechCorp LLC",
            "Effective Date": "2024-01-15",
            "Governing Law State": "California",
            "Mutual NDA": "true",
            "Company Representative Signature": "Jane Smith",
            "Counterparty Signature": "Raj Patel",
        },
        path=[ContractStatus.APPROVED, ContractStatus.SENT, ContractStatus.SIGNED],
    ),
    SampleContract(
        name="Employment - John Doe",
        blueprint="Employment Agreement",
        values={
            "Employee Full Name": "John Doe",
            "Job Title": "Senior Developer",
            "Start Date": "2024-02-01",
            "Salary": "$120,000/year",
            "Full Time Position": "true",
            "Employee Signature": "John Doe",
            "Employer Signature": "Acme HR",
        },
        path=[ContractStatus.APPROVED],
    ),
    SampleContract(
        name="Service - Website Development",
        blueprint="Service Agreement",
        values={
            "Service Provider": "WebDev Pro",
            "Client Name": "StartupXYZ",
            "Service Description": "Full-stack web application development",
            "Service Start Date": "2024-03-01",
            "Total Fee": "$25,000",
            "Service Provider Signature": "WebDev Pro",
            "Client Signature": "StartupXYZ",
        },
    ),
]


def seed(db: Session) -> Dict[str, int]:
    """Insert the sample blueprints and contracts.

    Returns:
        Counts of created blueprints, contracts and transitions
    """
    blueprint_service = BlueprintService(db)
    contract_service = ContractService(db)

    field_ids: Dict[str, Dict[str, str]] = {}
    blueprint_ids: Dict[str, str] = {}
    for name, (description, specs) in BLUEPRINTS.items():
        blueprint = blueprint_service.create(
            BlueprintCreate(
                name=name,
                description=description,
                fields=[
                    BlueprintFieldCreate(
                        type=ftype,
                        label=label,
                        required=required,
                        position_x=0,
                        position_y=index,
                    )
                    for index, (ftype, label, required) in enumerate(specs)
                ],
            )
        )
        blueprint_ids[name] = blueprint.id
        field_ids[name] = {f.label: f.id for f in blueprint.fields}

    transitions = 0
    for sample in SAMPLE_CONTRACTS:
        labels = field_ids[sample.blueprint]
        contract = contract_service.create(
            ContractCreate(
                name=sample.name,
                blueprint_id=blueprint_ids[sample.blueprint],
                values=[
                    ContractValueInput(field_id=labels[label], value=value)
                    for label, value in sample.values.items()
                ],
            )
        )
        for status in sample.path:
            contract_service.update_status(
                contract.id, ContractStatusUpdate(status=status, reason="Seed data")
            )
            transitions += 1

    counts = {
        "blueprints": len(BLUEPRINTS),
        "contracts": len(SAMPLE_CONTRACTS),
        "transitions": transitions,
    }
    logger.info("seed_completed", **counts)
    return counts
