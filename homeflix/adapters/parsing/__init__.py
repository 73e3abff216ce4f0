"""
Adaptateurs de parsing pour Homeflix.

Ce package contient les implementations concretes des interfaces de parsing:
- TitleExtractor: Requete de recherche, type et position d'episode depuis un chemin
"""

from homeflix.adapters.parsing.title_extractor import TitleExtractor

__all__ = ["TitleExtractor"]
