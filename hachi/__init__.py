"""
Hachi - Agregateur de metadonnees pour catalogues de streaming.

Ce package reconcilie les metadonnees (series, episodes, liens video,
collections) de plusieurs fournisseurs amont en une representation canonique.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur, erreurs)
- services/ : Couche application (reconciliation, saisons, crawl, façades)
- adapters/ : Couche infrastructure (clients HTTP, scraping HTML, stockage JSON)
"""

__version__ = "0.1.0"
