"""Business logic: onboarding, subscriptions, summaries and YouTube lookups."""
