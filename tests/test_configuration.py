"""
Tests for login configuration parsing.
"""

import pytest

from connect_basic_auth.errors import JaasConfigError
from connect_basic_auth.jaas.configuration import Configuration, ControlFlag


SAMPLE = """
// Connect REST authentication
KafkaConnect {
    connect_basic_auth.jaas.modules.PropertyFileLoginModule required
        file="/etc/connect/credentials.properties"
        debug=true;
    example.ldap.LdapLoginModule Sufficient url="ldap://localhost:389";
};

/* secondary entry
   spanning lines */
Other { example.Module optional; };
# trailing comment
"""


class TestConfiguration:

    def test_parses_entries_and_options(self):
        configuration = Configuration.from_string(SAMPLE)

        assert set(configuration.entry_names) == {"KafkaConnect", "Other"}
        first, second = configuration.get_app_configuration_entry("KafkaConnect")
        assert first.login_module_name == "connect_basic_auth.jaas.modules.PropertyFileLoginModule"
        assert first.control_flag == ControlFlag.REQUIRED
        assert dict(first.options) == {"file": "/etc/connect/credentials.properties", "debug": "true"}
        assert second.control_flag == ControlFlag.SUFFICIENT
        assert second.options["url"] == "ldap://localhost:389"

    def test_unknown_entry_is_none(self):
        configuration = Configuration.from_string(SAMPLE)
        assert configuration.get_app_configuration_entry("KafkaConnect1") is None

    def test_empty_entry(self):
        configuration = Configuration.from_string("Empty { };")
        assert configuration.get_app_configuration_entry("Empty") == ()

    def test_options_are_read_only(self):
        configuration = Configuration.from_string(SAMPLE)
        entry = configuration.get_app_configuration_entry("Other")[0]
        with pytest.raises(TypeError):
            entry.options["file"] = "/tmp/other"

    def test_quoted_value_escapes(self):
        configuration = Configuration.from_string('A { m.M required file="C:\\\\creds \\"x\\"";};')
        assert configuration.get_app_configuration_entry("A")[0].options["file"] == 'C:\\creds "x"'

    @pytest.mark.parametrize("text, line", [
        ("A { m.M required }", 1),
        ("A { m.M mandatory; };", 1),
        ("A {\n m.M required file; };", 2),
        ("A { m.M required; }", 1),
        ('A { m.M required file="x; };', 1),
        ("A { m.M required; };\nA { m.M optional; };", 2),
    ])
    def test_syntax_errors(self, text, line):
        with pytest.raises(JaasConfigError) as exc_info:
            Configuration.from_string(text)
        assert exc_info.value.line == line

    def test_missing_file(self, tmp_path):
        with pytest.raises(JaasConfigError):
            Configuration.from_file(tmp_path / "missing.conf")
