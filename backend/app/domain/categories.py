"""Idea category enum and boundary conversion.

Pure domain logic with no external dependencies.
"""
from enum import Enum


class IdeaCategory(str, Enum):
    """Closed set of venture categories. Values are the wire contract with the UI."""

    AI_WRAPPER = "ai-wrapper"
    SAAS_TOOL = "saas-tool"
    MICRO_SAAS = "micro-saas"
    NOTION_TEMPLATE = "notion-template"
    DIGITAL_PRODUCT = "digital-product"
    NEWSLETTER = "newsletter"
    CONTENT_CREATOR = "content-creator"
    COMMUNITY = "community"
    MARKETPLACE = "marketplace"
    INFO_PRODUCT = "info-product"
    AGENCY_SERVICE = "agency-service"
    CONSULTING = "consulting"
    PRODUCTIZED_SERVICE = "productized-service"
    ECOMMERCE = "ecommerce"
    MOBILE_APP = "mobile-app"
    CHROME_EXTENSION = "chrome-extension"
    OTHER = "other"


CATEGORY_DISPLAY_NAMES: dict[IdeaCategory, str] = {
    IdeaCategory.AI_WRAPPER: "AI Wrapper/Tool",
    IdeaCategory.SAAS_TOOL: "SaaS Tool",
    IdeaCategory.MICRO_SAAS: "Micro-SaaS",
    IdeaCategory.NOTION_TEMPLATE: "Notion Template",
    IdeaCategory.DIGITAL_PRODUCT: "Digital Product",
    IdeaCategory.NEWSLETTER: "Newsletter",
    IdeaCategory.CONTENT_CREATOR: "Content Creator",
    IdeaCategory.COMMUNITY: "Community",
    IdeaCategory.MARKETPLACE: "Marketplace",
    IdeaCategory.INFO_PRODUCT: "Info Product/Course",
    IdeaCategory.AGENCY_SERVICE: "Agency/Service",
    IdeaCategory.CONSULTING: "Consulting",
    IdeaCategory.PRODUCTIZED_SERVICE: "Productized Service",
    IdeaCategory.ECOMMERCE: "E-commerce",
    IdeaCategory.MOBILE_APP: "Mobile App",
    IdeaCategory.CHROME_EXTENSION: "Chrome Extension",
    IdeaCategory.OTHER: "Other",
}

# Categories that already sell founder time rather than a product
SERVICE_CATEGORIES: frozenset[IdeaCategory] = frozenset({
    IdeaCategory.CONSULTING,
    IdeaCategory.AGENCY_SERVICE,
    IdeaCategory.PRODUCTIZED_SERVICE,
})


def coerce_category(value: object) -> IdeaCategory:
    """Convert any external value into an IdeaCategory.

    Total function: unknown strings, wrong types and None all resolve to
    IdeaCategory.OTHER. Matching is exact on the wire value after
    stripping surrounding whitespace; enum members pass through unchanged.
    """
    if isinstance(value, IdeaCategory):
        return value
    if isinstance(value, str):
        try:
            return IdeaCategory(value.strip())
        except ValueError:
            return IdeaCategory.OTHER
    return IdeaCategory.OTHER


def category_display_name(category: IdeaCategory | str) -> str:
    """Human-readable category name, e.g. "saas-tool" -> "SaaS Tool"."""
    return CATEGORY_DISPLAY_NAMES[coerce_category(category)]


def all_categories() -> list[IdeaCategory]:
    """All categories in declaration order (``other`` last)."""
    return list(IdeaCategory)
