"""Unit tests for the Java matcher."""

from configflow.matchers.java import VARIABLE_KEY_MESSAGE, JavaMatcher, infer_from_java_type
from configflow.models.types import Confidence, ConfigType, WarningType


def in_method(body: str) -> str:
    """Wrap statements in a class and method."""
    return f"class App {{\n  void run() {{\n    {body}\n  }}\n}}\n"


def in_class(members: str) -> str:
    """Wrap members in a class."""
    return f"class App {{\n  {members}\n}}\n"


class TestJavaGetenv:
    """Tests for System.getenv access."""

    def test_declared_int(self, java_matcher: JavaMatcher):
        """Test an int declaration is integer/high."""
        source = in_method('int port = Integer.parseInt(System.getenv("PORT"));')
        result = java_matcher.discover("App.java", source)

        usage = result.usages[0]
        assert usage.name == "PORT"
        assert usage.inferred_type == ConfigType.INTEGER
        assert usage.confidence == Confidence.HIGH
        assert usage.line_number == 3

    def test_declared_boolean(self, java_matcher: JavaMatcher):
        """Test a boolean declaration is boolean/high."""
        source = in_method('boolean debug = Boolean.parseBoolean(System.getenv("DEBUG"));')
        result = java_matcher.discover("App.java", source)

        assert result.usages[0].inferred_type == ConfigType.BOOLEAN
        assert result.usages[0].confidence == Confidence.HIGH

    def test_declared_string_ignores_name_keywords(self, java_matcher: JavaMatcher):
        """Test String declarations win over name keywords."""
        source = in_method('String url = System.getenv("DATABASE_URL");')
        result = java_matcher.discover("App.java", source)

        assert result.usages[0].inferred_type == ConfigType.STRING
        assert result.usages[0].confidence == Confidence.HIGH

    def test_var_falls_back_to_context(self, java_matcher: JavaMatcher):
        """Test var declarations use line context instead."""
        source = in_method('var port = Integer.parseInt(System.getenv("PORT"));')
        result = java_matcher.discover("App.java", source)

        assert result.usages[0].inferred_type == ConfigType.INTEGER
        assert result.usages[0].confidence == Confidence.HIGH

    def test_undeclared_context(self, java_matcher: JavaMatcher):
        """Test URI.create(...) without a declaration is url/medium."""
        source = in_method('client.connect(URI.create(System.getenv("API_BASE")));')
        result = java_matcher.discover("App.java", source)

        assert result.usages[0].inferred_type == ConfigType.URL
        assert result.usages[0].confidence == Confidence.MEDIUM

    def test_no_signal_is_low_string(self, java_matcher: JavaMatcher):
        """Test an expression statement with no hints is string/low."""
        source = in_method('log(System.getenv("REGION"));')
        result = java_matcher.discover("App.java", source)

        assert result.usages[0].inferred_type == ConfigType.STRING
        assert result.usages[0].confidence == Confidence.LOW

    def test_ternary_default(self, java_matcher: JavaMatcher):
        """Test the ternary alternative becomes the default."""
        source = in_method(
            'String h = System.getenv("HOST") != null ? System.getenv("HOST") : "localhost";'
        )
        result = java_matcher.discover("App.java", source)

        assert len(result.usages) == 2
        assert all(u.default_value == "localhost" for u in result.usages)

    def test_variable_key_warns(self, java_matcher: JavaMatcher):
        """Test System.getenv(name) warns."""
        source = in_method("String v = System.getenv(name);")
        result = java_matcher.discover("App.java", source)

        assert result.usages == []
        assert len(result.warnings) == 1
        assert result.warnings[0].message == VARIABLE_KEY_MESSAGE
        assert result.warnings[0].warning_type == WarningType.DYNAMIC_ACCESS

    def test_other_receivers_ignored(self, java_matcher: JavaMatcher):
        """Test props.getenv("KEY") is ignored."""
        source = in_method('String v = props.getenv("PORT");')
        result = java_matcher.discover("App.java", source)

        assert result.usages == []


class TestJavaValueAnnotation:
    """Tests for Spring @Value placeholders."""

    def test_value_with_default(self, java_matcher: JavaMatcher):
        """Test @Value("${key:default}") on an int field."""
        source = in_class('@Value("${server.port:8080}")\n  private int port;')
        result = java_matcher.discover("App.java", source)

        usage = result.usages[0]
        assert usage.name == "server.port"
        assert usage.default_value == "8080"
        assert usage.inferred_type == ConfigType.INTEGER
        assert usage.confidence == Confidence.HIGH

    def test_value_pair(self, java_matcher: JavaMatcher):
        """Test @Value(value = "${KEY}")."""
        source = in_class('@Value(value = "${APP_NAME}")\n  private String name;')
        result = java_matcher.discover("App.java", source)

        assert [u.name for u in result.usages] == ["APP_NAME"]
        assert result.usages[0].default_value is None

    def test_value_without_placeholder(self, java_matcher: JavaMatcher):
        """Test a literal @Value is not a variable."""
        source = in_class('@Value("constant")\n  private String name;')
        result = java_matcher.discover("App.java", source)

        assert result.usages == []


class TestInferFromJavaType:
    """Tests for declared-type mapping."""

    def test_known_types(self):
        """Test the mapped types."""
        assert infer_from_java_type("Long") == (ConfigType.INTEGER, Confidence.HIGH)
        assert infer_from_java_type("Boolean") == (ConfigType.BOOLEAN, Confidence.HIGH)
        assert infer_from_java_type("URI") == (ConfigType.URL, Confidence.HIGH)
        assert infer_from_java_type("double") == (ConfigType.STRING, Confidence.HIGH)

    def test_unknown_type(self):
        """Test other types are string/medium."""
        assert infer_from_java_type("Duration") == (ConfigType.STRING, Confidence.MEDIUM)
