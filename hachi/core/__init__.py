"""
Couche domaine (core).

Contient les entités du catalogue, les ports (interfaces abstraites),
les objets valeur et la taxonomie d'erreurs.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (httpx, BeautifulSoup).

Sous-packages :
- entities/ : Entités du catalogue (ShowEntry, Show, Episode, VideoAsset...)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Identifiants composites
"""
