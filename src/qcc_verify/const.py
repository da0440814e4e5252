ERRORS = {
  "E_LAYOUT_MISSING": "Prologue/selfref declarations or reconstructor source not found",
  "E_HEX_FORMAT": "Embedded literal is not valid hex",
  "E_PROLOGUE_MISMATCH": "Decoded prologue literal does not match visible prologue",
  "E_SELFREF_MISMATCH": "Decoded selfref literal does not match reconstructor source",
  "E_SELF_MISMATCH": "Reconstructed self text does not match program text",
}
