"""
Exceptions métier du registre des candidats
"""


class ErreurPersistance(RuntimeError):
    """Échec de lecture ou d'écriture du stockage.

    L'opération en cours est abandonnée ; l'instantané précédemment
    enregistré reste intact.
    """

    def __init__(self, message: str, cle: str = None):
        super().__init__(message)
        self.cle = cle
