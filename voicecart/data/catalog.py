"""Reference product catalog.

Loaded once at import and never mutated. Declaration order matters: the
search sort is stable, so equal prices come back in this order.
"""

from __future__ import annotations

from voicecart.models.contracts import Product


def _p(id_: int, name: str, brand: str, size: str, price: float, category: str, *tags: str) -> Product:
    return Product(id=id_, name=name, brand=brand, size=size, price=price, category=category, tags=tags)


CATALOG: tuple[Product, ...] = (
    # Fruits
    _p(1, "apples", "FreshFarm", "1 kg", 3.99, "Fruits", "fresh", "organic"),
    _p(2, "apples", "OrganicVale", "1 kg", 5.49, "Fruits", "organic", "premium"),
    _p(3, "bananas", "TropicBest", "6 pack", 1.99, "Fruits", "fresh"),
    _p(4, "oranges", "SunGrove", "1 kg", 2.99, "Fruits", "fresh", "vitamin c"),
    _p(5, "mango", "TropicBest", "500 g", 3.49, "Fruits", "tropical", "fresh"),
    _p(6, "strawberries", "BerryFresh", "250 g", 4.29, "Fruits", "fresh", "organic"),
    # Vegetables
    _p(7, "tomatoes", "GardenPick", "500 g", 1.49, "Vegetables", "fresh"),
    _p(8, "spinach", "GreenLeaf", "200 g", 2.19, "Vegetables", "organic", "fresh"),
    _p(9, "broccoli", "FreshFields", "400 g", 2.49, "Vegetables", "fresh", "organic"),
    _p(10, "onions", "FarmSelect", "1 kg", 0.99, "Vegetables", "fresh"),
    _p(11, "carrots", "GreenLeaf", "500 g", 1.29, "Vegetables", "organic", "fresh"),
    # Dairy
    _p(12, "milk", "DairyBest", "1 L", 1.29, "Dairy", "whole milk"),
    _p(13, "milk", "DairyBest", "2 L", 2.09, "Dairy", "whole milk", "family"),
    _p(14, "almond milk", "NutriBlend", "1 L", 3.49, "Dairy", "vegan", "lactose free", "plant based"),
    _p(15, "oat milk", "OatWave", "1 L", 3.79, "Dairy", "vegan", "plant based"),
    _p(16, "butter", "CreamyFarm", "250 g", 2.79, "Dairy", "unsalted"),
    _p(17, "butter", "LuxeCream", "500 g", 4.99, "Dairy", "premium", "salted"),
    _p(18, "cheddar cheese", "CheeseHouse", "200 g", 3.99, "Dairy", "sharp", "aged"),
    _p(19, "greek yogurt", "CreamyFarm", "500 g", 2.99, "Dairy", "probiotic", "low fat"),
    # Personal Care
    _p(20, "toothpaste", "BrightSmile", "100 ml", 2.49, "Personal Care", "whitening", "mint"),
    _p(21, "toothpaste", "DentaFresh", "150 ml", 3.99, "Personal Care", "sensitive", "fluoride"),
    _p(22, "toothpaste", "AquaClean", "200 ml", 4.99, "Personal Care", "herbal", "natural"),
    _p(23, "shampoo", "HairLux", "400 ml", 5.99, "Personal Care", "moisturizing", "all hair types"),
    _p(24, "shampoo", "NatureCare", "300 ml", 4.49, "Personal Care", "organic", "sulfate free"),
    _p(25, "body wash", "SkinSoft", "500 ml", 3.99, "Personal Care", "moisturizing", "gentle"),
    _p(26, "deodorant", "FreshGuard", "150 ml", 3.49, "Personal Care", "antiperspirant", "24hr"),
    # Grains & Staples
    _p(27, "basmati rice", "GrainMaster", "1 kg", 2.99, "Grains & Staples", "long grain", "aromatic"),
    _p(28, "basmati rice", "RoyalGrain", "5 kg", 12.99, "Grains & Staples", "premium", "long grain"),
    _p(29, "whole wheat bread", "BakeWell", "400 g", 1.99, "Bakery", "fiber rich", "healthy"),
    _p(30, "whole wheat bread", "NatureBake", "600 g", 3.49, "Bakery", "multigrain", "organic"),
    _p(31, "pasta", "ItalianChoice", "500 g", 1.49, "Grains & Staples", "whole wheat"),
    _p(32, "oats", "MorningBest", "500 g", 2.29, "Grains & Staples", "rolled oats", "fiber"),
    # Beverages
    _p(33, "orange juice", "SunPress", "1 L", 2.99, "Beverages", "no sugar", "100% juice"),
    _p(34, "green tea", "LeafZen", "25 bags", 3.49, "Beverages", "antioxidant", "organic"),
    _p(35, "coffee", "BrewCraft", "250 g", 6.99, "Beverages", "arabica", "medium roast"),
    _p(36, "sparkling water", "AquaFizz", "1 L", 1.29, "Beverages", "zero calories", "sugar free"),
    # Cleaning
    _p(37, "dish soap", "SparkleClean", "500 ml", 1.99, "Cleaning", "grease cutting", "lemon"),
    _p(38, "laundry detergent", "WashPro", "1 kg", 5.99, "Cleaning", "concentrated", "fresh scent"),
    _p(39, "laundry detergent", "EcoWash", "1.5 kg", 8.49, "Cleaning", "eco friendly", "plant based"),
)
