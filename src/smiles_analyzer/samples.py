# src/smiles_analyzer/samples.py
"""Example molecules shown in the dashboard's SMILES analyzer."""

SAMPLE_MOLECULES = [
    ("Aspirin", "CC(=O)OC1=CC=CC=C1C(=O)O"),
    ("N-methylpiperazine aryl ether", "CN1CCN(CC1)C2=CC=C(C=C2)OC"),
    ("Sulfonamide", "CC1=CC=C(C=C1)S(=O)(=O)NC2=CC=CC=N2"),
    ("Biphenyl", "C1=CC=C(C=C1)C2=CC=CC=C2"),
    ("Palmitic acid", "O=C(O)CCCCCCCCCCCCCCC"),
]
