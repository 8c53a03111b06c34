from lipi.core.orthography import ORTHOGRAPHIC_RULES, apply_orthographic_fixes, rules_for


def test_kannada_all_classes():
    assert apply_orthographic_fixes("ಶಙ್ಕರ", "KANNADA") == "ಶಂಕರ"
    assert apply_orthographic_fixes("ಪಞ್ಚ", "KANNADA") == "ಪಂಚ"
    assert apply_orthographic_fixes("ಕಣ್ಠ", "KANNADA") == "ಕಂಠ"
    assert apply_orthographic_fixes("ಶಾನ್ತಿ", "KANNADA") == "ಶಾಂತಿ"
    assert apply_orthographic_fixes("ಕಮ್ಬಲ", "KANNADA") == "ಕಂಬಲ"


def test_nasal_before_other_class_is_kept():
    # dental nasal before a velar stop is not homorganic
    assert apply_orthographic_fixes("ಸನ್ಕ", "KANNADA") == "ಸನ್ಕ"
    # nasal before a semivowel
    assert apply_orthographic_fixes("ಅನ್ಯ", "KANNADA") == "ಅನ್ಯ"


def test_rules_compose_across_adjacent_syllables():
    assert apply_orthographic_fixes("ಙ್ಕಙ್ಗನ್ತ", "KANNADA") == "ಂಕಂಗಂತ"


def test_telugu_palatal_uses_telugu_nya():
    assert apply_orthographic_fixes("పఞ్చ", "TELUGU") == "పంచ"


def test_malayalam_palatal_uses_malayalam_nya():
    assert apply_orthographic_fixes("പഞ്ച", "MALAYALAM") == "പംച"


def test_bengali_dental():
    assert apply_orthographic_fixes("শান্তি", "BENGALI") == "শাংতি"
    assert apply_orthographic_fixes("বন্ধ", "BENGALI") == "বংধ"


def test_gurmukhi_uses_bindi():
    assert apply_orthographic_fixes("ਸਙ੍ਗ", "GURMUKHI") == "ਸਂਗ"


def test_gujarati_labial():
    assert apply_orthographic_fixes("કમ્પ", "GUJARATI") == "કંપ"


def test_tamil_only_plain_stops():
    assert apply_orthographic_fixes("சங்க", "TAMIL") == "சஂக"
    assert len(rules_for("TAMIL")) == 5


def test_scripts_without_rules_pass_through():
    assert apply_orthographic_fixes("शङ्कर", "DEVANAGARI") == "शङ्कर"
    assert apply_orthographic_fixes("śaṅkara", "IAST") == "śaṅkara"
    assert rules_for("HK") == []
    assert apply_orthographic_fixes("", "KANNADA") == ""


def test_every_table_stays_in_its_block():
    for script, rules in ORTHOGRAPHIC_RULES.items():
        bases = set()
        for pattern, replacement in rules:
            bases.add(ord(replacement) & ~0x7F)
            for ch in pattern.pattern:
                if ord(ch) >= 0x0900:
                    bases.add(ord(ch) & ~0x7F)
        assert len(bases) == 1, script
