def normalize_customer(customer):
    if customer is None:
        return None

    return {
        "id": customer.id,
        "email": customer.email,
        "first_name": customer.first_name,
        "last_name": customer.last_name,
        "subscription": {
            "status": customer.subscription_status,
            "plan": customer.subscription_plan,
        } if customer.has_active_subscription else None,
    }
