"""
Billing package - subscription entitlement, token metering and Stripe sync.

The usage gate admits metered requests against the monthly token cap; the
webhook reconciler keeps subscription rows in step with Stripe events.
"""
