"""qcc emitted-program protocol constants.

Single source of truth for the fixed C text blocks and literal layouts.
Keep this file stable. Emitter and Verifier must remain synchronized.
"""

# Fixed-size read window for source and scratch replay
CHUNK_SIZE = 0x1000

WARNING = b"/* Warning: Automatically generated code; do not modify */\n"

PREPROCESSOR_MACRO = b"#define _QUINE_\n"

PROLOGUE_HEADERS = (
    b"#include <stdlib.h>\n"
    b"#include <stdio.h>\n"
    b"#include <string.h>\n"
    b"\n"
)

PROLOGUE_PROTOTYPE = (
    b"const char *get_self();\n"
    b"\n"
)

# Decoded size is at most half the literal length, plus the terminator.
HEX_DECODE_HELPER = (
    b"size_t hex_decode(const char *input, char **output) {\n"
    b"  size_t l = strlen(input);\n"
    b"  char *decoded = *output = malloc(l / 2 + 1);\n"
    b"  while (*input) {\n"
    b"    unsigned char byte;\n"
    b"    sscanf(input, \"%2hhx\", &byte);\n"
    b"    *decoded++ = byte;\n"
    b"    input += 2;\n"
    b"  }\n"
    b"  *decoded = 0;\n"
    b"  return decoded - *output;\n"
    b"}\n"
)

SELFREF = (
    b"const char *get_self() {\n"
    b"  static char *self;\n"
    b"  if (self == NULL) {\n"
    b"    char *decoded_prologue, *decoded_selfref;\n"
    b"    size_t c_prologue = hex_decode(prologue, &decoded_prologue);\n"
    b"    size_t c_selfref = hex_decode(selfref, &decoded_selfref);\n"
    b"    self = malloc(c_prologue + c_selfref + strlen(prologue) + strlen(selfref) + 0x1000);\n"
    b"    sprintf(self, \"%sconst char prologue[] = %c%s%c;\\nconst char selfref[] = %c%s%c;\\n\\n%s\",\n"
    b"            decoded_prologue, 34, prologue, 34, 34, selfref, 34, decoded_selfref);\n"
    b"    free(decoded_prologue), free(decoded_selfref);\n"
    b"  }\n"
    b"  return self;\n"
    b"}\n"
)

# Declarations: [OPEN | literal | CLOSE]
PROLOGUE_DECL_OPEN = b'const char prologue[] = "'
PROLOGUE_DECL_CLOSE = b'";\n'
SELFREF_DECL_OPEN = b'const char selfref[] = "'
SELFREF_DECL_CLOSE = b'";\n\n'

# Process exit codes (I/O failures exit with the OS errno instead)
EXIT_USAGE = 2
EXIT_SCRATCH = 3
