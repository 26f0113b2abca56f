"""
Ports (interfaces abstraites) du domaine.

Les adaptateurs de hachi.adapters implementent ces contrats; les services
ne dependent que d'eux.

Exports :
- providers : enregistrements normalises et interfaces des fournisseurs
- documents : recuperation de documents HTML et resolution de playlist
- catalog : facade publique du catalogue et stockage des assets
"""
