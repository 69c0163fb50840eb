"""
Services applicatifs (cas d'utilisation) de SerieSync.

Les services orchestrent la logique du domaine: correspondance des candidats,
extraction saison/episode, reconciliation d'une serie, scan d'une
bibliotheque et application d'une selection.

Ils dependent des ports definis dans core/, jamais des implementations
concretes de infrastructure/.
"""
