"""
Rule chain package.

Sequential composition of pluggable rules:

- app.engine: SequentialRuleEngine with fold and predicate run policies.
- app.models: Capability protocols and the request context.
- app.pricing: Commuting price rules and the PriceCalculator facade.
- app.authorization: Request checks and the RequestAuthorizer facade.

Rules are evaluated synchronously in registration order; the predicate
variant stops at the first rejecting rule.
"""
