from .wardrobe import OutfitPlan, WardrobeService, WardrobeView

__all__ = ["OutfitPlan", "WardrobeService", "WardrobeView"]
