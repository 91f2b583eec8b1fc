"""Conector GitHub — adapter de borda para webhooks de pacotes.

Responsabilidades:
- Headers de identidade da entrega (X-GitHub-Delivery, X-GitHub-Event)
- Assinatura HMAC (X-Hub-Signature-256)
- Decodificação parcial do payload (package.package_type)
"""

from .models import DeliveryIdentity, PackageEvent, PackageInfo
from .signature import SignatureResult, compute_signature, verify_github_signature

__all__ = [
    "DeliveryIdentity",
    "PackageEvent",
    "PackageInfo",
    "SignatureResult",
    "compute_signature",
    "verify_github_signature",
]
