"""
Services applicatifs.

Les services orchestrent le fournisseur principal et les sources
d'enrichissement pour produire les entites du catalogue:
- reconciler : fusion des champs issus de plusieurs sources
- seasons : decoupage des episodes en saisons synthetiques
- archive_crawler : parcours pagine des archives avec delai
- catalogs : facades publiques (anime, films/series)
- feed_generator : generation hors ligne des collections et tendances

Les services dependent des ports definis dans core/, pas des adaptateurs.
"""
