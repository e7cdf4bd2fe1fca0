"""Condition and rule routes for the dependency catalog."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Field, SQLModel

from packwise.checklist.preview import SandboxEffect
from packwise.checklist.vault import Vault, get_vault
from packwise.models import (
    Condition,
    JourneyArchetype,
    RemovalPolicy,
    Rule,
    RuleAction,
    SectionDesignation,
)

router = APIRouter(tags=["conditions"])


class ConditionCreate(SQLModel):
    name: str = Field(min_length=1)
    icon: str = "bolt.circle"
    explanation: str = ""


class ConditionUpdate(SQLModel):
    name: str | None = None
    icon: str | None = None
    explanation: str | None = None


class RuleCreate(SQLModel):
    action: RuleAction
    target_item_name: str = Field(min_length=1)
    target_section: SectionDesignation
    removal_policy: RemovalPolicy = RemovalPolicy.remove_if_not_packed
    priority: int = 3
    reason_text: str = ""
    archetype_mask: set[JourneyArchetype] = Field(default_factory=set)


class SandboxRequest(SQLModel):
    condition_ids: list[UUID]


@router.get("/conditions", response_model=list[Condition])
async def list_conditions(vault: Vault = Depends(get_vault)):
    """List all conditions with their rule counts."""
    return vault.store.conditions


@router.post("/conditions", response_model=Condition, status_code=201)
async def create_condition(body: ConditionCreate, vault: Vault = Depends(get_vault)):
    """Create a custom (non built-in) condition."""
    try:
        return vault.add_condition(body.name, body.icon, body.explanation)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/conditions/sandbox", response_model=list[SandboxEffect])
async def condition_sandbox(body: SandboxRequest, vault: Vault = Depends(get_vault)):
    """
    Preview the combined add-item effects of a set of conditions.

    Nothing is applied; items added by more than one condition are listed
    once, under the first condition that adds them.
    """
    return vault.sandbox(body.condition_ids)


@router.patch("/conditions/{condition_id}", response_model=Condition)
async def update_condition(
    condition_id: UUID, body: ConditionUpdate, vault: Vault = Depends(get_vault)
):
    """Edit a condition's name, icon or explanation."""
    try:
        condition = vault.update_condition(
            condition_id, body.name, body.icon, body.explanation
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not condition:
        raise HTTPException(status_code=404, detail="Condition not found")
    return condition


@router.delete("/conditions/{condition_id}", status_code=204)
async def delete_condition(condition_id: UUID, vault: Vault = Depends(get_vault)):
    """
    Delete a condition and all of its rules.

    Sessions that already applied the condition keep the items it added.
    Their lineage still names the deleted rules, so no later retract removes them.
    """
    if not vault.delete_condition(condition_id):
        raise HTTPException(status_code=404, detail="Condition not found")


@router.get("/conditions/{condition_id}/rules", response_model=list[Rule])
async def list_rules(condition_id: UUID, vault: Vault = Depends(get_vault)):
    """List a condition's rules, highest priority first."""
    rules = vault.rules_for_condition(condition_id)
    if rules is None:
        raise HTTPException(status_code=404, detail="Condition not found")
    return rules


@router.post("/conditions/{condition_id}/rules", response_model=Rule, status_code=201)
async def create_rule(
    condition_id: UUID, body: RuleCreate, vault: Vault = Depends(get_vault)
):
    """
    Add a rule to a condition.

    The rule takes effect the next time the condition is turned on; it is
    not applied retroactively to sessions where the condition is active.
    """
    rule = Rule(condition_id=condition_id, **body.model_dump())
    try:
        created = vault.add_rule(rule)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not created:
        raise HTTPException(status_code=404, detail="Condition not found")
    return created


@router.delete("/rules/{rule_id}", status_code=204)
async def delete_rule(rule_id: UUID, vault: Vault = Depends(get_vault)):
    """Delete a single rule and update its condition's rule count."""
    if not vault.delete_rule(rule_id):
        raise HTTPException(status_code=404, detail="Rule not found")
