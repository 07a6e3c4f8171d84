"""
Crowdfund Service

Crowdfunding escrow engine providing:
- A registry that creates independent crowdfunding requests
- Pledges toward a target amount before a deadline
- Owner withdrawal once the target is met
- Contributor refunds once a request expires unfunded
"""

__version__ = "1.0.0"
__service__ = "crowdfund_service"
