"""Rule operators that decide whether an inspected value matches."""