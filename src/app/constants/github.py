"""Constantes do protocolo de webhooks do GitHub e do filtro de pacotes."""

from __future__ import annotations

from enum import StrEnum

# Headers enviados pelo GitHub em toda entrega
DELIVERY_HEADER = "X-GitHub-Delivery"
EVENT_HEADER = "X-GitHub-Event"
SIGNATURE_HEADER = "X-Hub-Signature-256"

# Prefixo do algoritmo no header de assinatura
SIGNATURE_PREFIX = "sha256="

# Header de resposta com o motivo do descarte (204)
FILTER_MESSAGE_HEADER = "Message"


class PackageType(StrEnum):
    """Categorias de pacote do GitHub Packages (package.package_type)."""

    CONTAINER = "CONTAINER"
    DOCKER = "DOCKER"
    MAVEN = "MAVEN"
    NPM = "NPM"
    NUGET = "NUGET"
    RUBYGEMS = "RUBYGEMS"


# Única categoria encaminhada ao relay
ACCEPTED_PACKAGE_TYPE = PackageType.CONTAINER
