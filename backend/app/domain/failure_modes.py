"""Historical failure-mode reference data per idea category.

Read-only dataset: one entry per IdeaCategory, built once at import time
and exposed through a MappingProxyType so it can be shared freely.
"""

from dataclasses import dataclass
from types import MappingProxyType

from app.domain.categories import IdeaCategory, coerce_category


@dataclass(frozen=True)
class CommonFailure:
    """A named failure pattern and how to head it off."""

    name: str
    percentage: int  # share of failures in the category (0-100)
    mitigation: str


@dataclass(frozen=True)
class FailureModeEntry:
    """Abandonment statistics and common failures for one category."""

    category: IdeaCategory
    abandonment_rate: int  # % of ideas abandoned (0-100)
    sustainability_rate: int  # % still active after six months (0-100)
    common_failures: tuple[CommonFailure, ...]


def _entry(
    category: IdeaCategory,
    abandonment_rate: int,
    sustainability_rate: int,
    *failures: tuple[str, int, str],
) -> FailureModeEntry:
    return FailureModeEntry(
        category=category,
        abandonment_rate=abandonment_rate,
        sustainability_rate=sustainability_rate,
        common_failures=tuple(CommonFailure(name, pct, mitigation) for name, pct, mitigation in failures),
    )


FAILURE_MODES: MappingProxyType[IdeaCategory, FailureModeEntry] = MappingProxyType({
    IdeaCategory.AI_WRAPPER: _entry(
        IdeaCategory.AI_WRAPPER, 78, 22,
        ("API dependency risk", 45, "Build unique value layer on top of API"),
        ("Race to bottom pricing", 35, "Focus on specific niche, not general tool"),
        ("Feature parity with ChatGPT", 20, "Solve workflow problem, not just wrap API"),
    ),
    IdeaCategory.SAAS_TOOL: _entry(
        IdeaCategory.SAAS_TOOL, 65, 35,
        ("Scope creep before PMF", 40, "Ship MVP in 2 weeks, iterate based on feedback"),
        ("Underestimating support burden", 30, "Build self-serve docs from day 1"),
        ("Churn from poor onboarding", 30, "Optimize first 5 minutes of user experience"),
    ),
    IdeaCategory.MICRO_SAAS: _entry(
        IdeaCategory.MICRO_SAAS, 55, 45,
        ("Market too small", 35, "Validate $10k MRR ceiling before building"),
        ("Solo founder burnout", 35, "Automate everything, limit support hours"),
        ("Platform dependency", 30, "Diversify integrations early"),
    ),
    IdeaCategory.NOTION_TEMPLATE: _entry(
        IdeaCategory.NOTION_TEMPLATE, 70, 30,
        ("Low perceived value", 45, "Bundle with video training or community"),
        ("Easy to replicate", 35, "Build personal brand around template"),
        ("One-time purchase ceiling", 20, "Create template ecosystem with updates"),
    ),
    IdeaCategory.DIGITAL_PRODUCT: _entry(
        IdeaCategory.DIGITAL_PRODUCT, 60, 40,
        ("No distribution channel", 40, "Build audience before product"),
        ("Refund rate too high", 30, "Set clear expectations, offer preview"),
        ("Support overhead", 30, "Create comprehensive FAQ and docs"),
    ),
    IdeaCategory.NEWSLETTER: _entry(
        IdeaCategory.NEWSLETTER, 80, 20,
        ("Consistency burnout", 50, "Batch write 4 weeks ahead"),
        ("Slow subscriber growth", 30, "Cross-promote, guest posts, paid ads"),
        ("Monetization challenges", 20, "Plan revenue model before 1k subs"),
    ),
    IdeaCategory.CONTENT_CREATOR: _entry(
        IdeaCategory.CONTENT_CREATOR, 85, 15,
        ("Algorithm dependency", 40, "Build email list from day 1"),
        ("Content treadmill burnout", 40, "Repurpose content across platforms"),
        ("Delayed monetization", 20, "Offer paid product at 1k followers"),
    ),
    IdeaCategory.COMMUNITY: _entry(
        IdeaCategory.COMMUNITY, 75, 25,
        ("Cold start problem", 40, "Seed with 50 engaged founding members"),
        ("Moderation burden", 35, "Establish clear rules, empower moderators"),
        ("Value proposition unclear", 25, "Define unique benefit vs free alternatives"),
    ),
    IdeaCategory.MARKETPLACE: _entry(
        IdeaCategory.MARKETPLACE, 82, 18,
        ("Chicken-and-egg problem", 50, "Subsidize one side, constrain geography"),
        ("Disintermediation", 30, "Provide value beyond matching"),
        ("Unit economics", 20, "Validate take rate before scaling"),
    ),
    IdeaCategory.INFO_PRODUCT: _entry(
        IdeaCategory.INFO_PRODUCT, 65, 35,
        ("No unique insight", 40, "Share proprietary framework or data"),
        ("Completion rate issues", 35, "Design for quick wins, not comprehensiveness"),
        ("Refund abuse", 25, "Drip content, offer payment plans"),
    ),
    IdeaCategory.AGENCY_SERVICE: _entry(
        IdeaCategory.AGENCY_SERVICE, 50, 50,
        ("Founder as bottleneck", 45, "Document processes, hire early"),
        ("Scope creep", 35, "Fixed scope packages, change order process"),
        ("Client concentration", 20, "No client > 30% of revenue"),
    ),
    IdeaCategory.CONSULTING: _entry(
        IdeaCategory.CONSULTING, 45, 55,
        ("Feast or famine cycles", 45, "Always be marketing, even when busy"),
        ("Underpricing", 35, "Value-based pricing, raise rates 20%"),
        ("No leverage", 20, "Productize knowledge into courses/tools"),
    ),
    IdeaCategory.PRODUCTIZED_SERVICE: _entry(
        IdeaCategory.PRODUCTIZED_SERVICE, 55, 45,
        ("Delivery inconsistency", 40, "SOPs for everything, QA checklist"),
        ("Hiring challenges", 35, "Build talent pipeline before scaling"),
        ("Margin compression", 25, "Automate intake and delivery"),
    ),
    IdeaCategory.ECOMMERCE: _entry(
        IdeaCategory.ECOMMERCE, 70, 30,
        ("Customer acquisition cost", 40, "Build organic channel before paid"),
        ("Inventory/fulfillment", 35, "Start with dropship or print-on-demand"),
        ("Competition on price", 25, "Differentiate on brand, not price"),
    ),
    IdeaCategory.MOBILE_APP: _entry(
        IdeaCategory.MOBILE_APP, 80, 20,
        ("App store discovery", 40, "Build audience before app launch"),
        ("Development complexity", 35, "Start with web app, validate first"),
        ("Retention cliff", 25, "Focus on Day 1 and Day 7 retention"),
    ),
    IdeaCategory.CHROME_EXTENSION: _entry(
        IdeaCategory.CHROME_EXTENSION, 65, 35,
        ("Chrome Web Store changes", 40, "Build direct distribution channel"),
        ("Monetization friction", 35, "Freemium with clear upgrade path"),
        ("Feature absorbed by browser", 25, "Solve workflow, not feature gap"),
    ),
    IdeaCategory.OTHER: _entry(
        IdeaCategory.OTHER, 68, 32,
        ("Unclear value proposition", 40, "Define specific problem and audience"),
        ("Execution complexity", 35, "Start with simplest possible version"),
        ("Market timing", 25, "Validate demand before building"),
    ),
})


def get_failure_mode_data(category: IdeaCategory | str | None) -> FailureModeEntry:
    """Return the failure-mode entry for a category.

    Total function -- unknown or malformed categories resolve to the
    ``other`` entry, never raise.
    """
    return FAILURE_MODES[coerce_category(category)]
