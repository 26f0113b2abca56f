"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et
encapsulent toutes les entrées/sorties.

Sous-packages :
- api/ : Infrastructure HTTP partagée (retry, cache)
- html.py : Récupération et parsing de documents HTML (httpx + BeautifulSoup)
- providers/ : Un client par fournisseur amont
- vixcloud.py : Extraction du manifeste de lecture depuis les scripts embarqués
- storage/ : Assets JSON précalculés

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""
