from mcmf.utils.config import DEFAULT_CONFIG, Config


def test_missing_file_uses_defaults(tmp_path):
    config = Config(str(tmp_path / "missing.yaml"))
    assert config.config == DEFAULT_CONFIG
    assert config.config is not DEFAULT_CONFIG


def test_file_values_override_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("output:\n  results_directory: out\nvisualization:\n  style: dark\n")
    config = Config(str(path))
    assert config.get('output.results_directory') == 'out'
    assert config.get('output.save_results') is True
    assert config.get('visualization.style') == 'dark'
    assert config.get('algorithm.detect_negative_cycles') is True


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert Config(str(path)).config == DEFAULT_CONFIG


def test_get_and_set_with_dot_notation(tmp_path):
    config = Config(str(tmp_path / "missing.yaml"))
    assert config.get('report.missing.key', 'fallback') == 'fallback'
    config.set('report.draining_report', True)
    config.set('extra.nested.value', 3)
    assert config.get('report.draining_report') is True
    assert config.get('extra.nested.value') == 3
    assert DEFAULT_CONFIG['report']['draining_report'] is False
