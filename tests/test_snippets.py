from ateproject.snippets import OUTPUT_FUNCTION, output_call


def test_default_call_quotes_everything():
    assert output_call("V1", "3.3", "3.0~3.6") == '__ate.OutputRst("V1", "3.3", "3.0~3.6")'


def test_empty_call():
    assert output_call("", "", "") == '__ate.OutputRst("", "", "")'


def test_value_expression_is_unquoted():
    text = output_call("V1", "volt", "3.0~3.6", value_is_expression=True)
    assert ", volt, " in text
    assert text.endswith('"3.0~3.6")')


def test_standard_expression_is_unquoted():
    text = output_call("V1", "3.3", "limit", standard_is_expression=True)
    assert text.endswith(", limit)")


def test_extended_call_with_result_index():
    text = output_call("V1", "3.3", "3.0~3.6", result=1)
    assert text == '__ate.OutputRstEx("V1", "3.3", "3.0~3.6", 1)'


def test_extended_call_with_expressions():
    text = output_call("V1", "a", "b", True, True, 2)
    assert text.startswith(OUTPUT_FUNCTION + 'Ex("V1", ')
    assert text.endswith("a, b, 2)")