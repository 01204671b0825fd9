"""Subscription API routes.

Learn: Every handler takes `identity` from get_current_user and passes
identity.user_id into the service explicitly. The path id and the body
are the only other inputs; neither can change who owns the record.
"""

from fastapi import APIRouter, Depends

from subtracker.api.dependencies import get_subscription_service
from subtracker.auth.dependencies import CurrentIdentity, get_current_user
from subtracker.schemas.subscription import (
    SubscriptionDeleted,
    SubscriptionRead,
    SubscriptionWrite,
)
from subtracker.services.subscription_service import SubscriptionService

router = APIRouter(prefix="/subscriptions")


@router.get("", response_model=list[SubscriptionRead])
async def list_subscriptions(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SubscriptionService = Depends(get_subscription_service),
):
    return await svc.list_subscriptions(identity.user_id)


@router.post("", response_model=SubscriptionRead, status_code=201)
async def create_subscription(
    body: SubscriptionWrite,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SubscriptionService = Depends(get_subscription_service),
):
    return await svc.create_subscription(identity.user_id, body.to_input())


@router.put("/{subscription_id}", response_model=SubscriptionRead)
async def update_subscription(
    subscription_id: str,
    body: SubscriptionWrite,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SubscriptionService = Depends(get_subscription_service),
):
    """Replace all fields of one of the caller's subscriptions."""
    return await svc.update_subscription(
        identity.user_id, subscription_id, body.to_input()
    )


@router.delete("/{subscription_id}", response_model=SubscriptionDeleted)
async def delete_subscription(
    subscription_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: SubscriptionService = Depends(get_subscription_service),
):
    await svc.delete_subscription(identity.user_id, subscription_id)
    return {"id": subscription_id}
