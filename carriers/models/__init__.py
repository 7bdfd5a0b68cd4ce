from carriers.models.articles import Article
from carriers.models.articles import CarrierArticleMapping
from carriers.models.articles import CarrierPurchaseTariff
from carriers.models.carriers import CarrierCategoryGroup
from carriers.models.carriers import CarrierCategoryGroupMember
from carriers.models.carriers import CarrierPortGroup
from carriers.models.carriers import CarrierPortGroupMember
from carriers.models.carriers import ShippingCarrier
from carriers.models.rules import CarrierAcceptanceRule
from carriers.models.rules import CarrierSurchargeArticleMap
from carriers.models.rules import CarrierSurchargeRule
from carriers.models.rules import CarrierTransformRule
from carriers.models.scope import RuleContext

__all__ = [
    "Article",
    "CarrierAcceptanceRule",
    "CarrierArticleMapping",
    "CarrierCategoryGroup",
    "CarrierCategoryGroupMember",
    "CarrierPortGroup",
    "CarrierPortGroupMember",
    "CarrierPurchaseTariff",
    "CarrierSurchargeArticleMap",
    "CarrierSurchargeRule",
    "CarrierTransformRule",
    "RuleContext",
    "ShippingCarrier",
]
