"""Unit tests for the JavaScript/TypeScript matcher."""

from configflow.matchers.javascript import JavaScriptMatcher
from configflow.models.types import Confidence, ConfigType, Language, WarningType


class TestJavaScriptAccessShapes:
    """Tests for the process.env access shapes."""

    def test_member_access(self, js_matcher: JavaScriptMatcher):
        """Test process.env.KEY yields one usage."""
        result = js_matcher.discover("app.js", "const name = process.env.APP_NAME;\n")

        assert len(result.usages) == 1
        usage = result.usages[0]
        assert usage.name == "APP_NAME"
        assert usage.file_path == "app.js"
        assert usage.line_number == 1
        assert usage.context == "const name = process.env.APP_NAME;"
        assert result.warnings == []

    def test_subscript_string_key(self, js_matcher: JavaScriptMatcher):
        """Test process.env['KEY'] strips quotes from the key."""
        result = js_matcher.discover("app.js", "const key = process.env['API_KEY'];\n")

        assert [u.name for u in result.usages] == ["API_KEY"]
        assert result.usages[0].inferred_type == ConfigType.SECRET

    def test_identifier_key_is_dynamic(self, js_matcher: JavaScriptMatcher):
        """Test process.env[name] is a warning, not a usage."""
        result = js_matcher.discover("app.js", "const v = process.env[name];\n")

        assert result.usages == []
        assert len(result.warnings) == 1
        assert result.warnings[0].warning_type == WarningType.DYNAMIC_ACCESS
        assert result.warnings[0].line_number == 1

    def test_template_key_is_computed(self, js_matcher: JavaScriptMatcher):
        """Test a template-string key is reported as computed."""
        result = js_matcher.discover("app.js", "const v = process.env[`${prefix}_HOST`];\n")

        assert result.usages == []
        assert len(result.warnings) == 1
        assert result.warnings[0].warning_type == WarningType.COMPUTED_KEY

    def test_lookalike_receivers_ignored(self, js_matcher: JavaScriptMatcher):
        """Test obj.env.KEY and a bare env.KEY are not matched."""
        source = "const a = config.env.PORT;\nconst b = env.PORT;\n"
        result = js_matcher.discover("app.js", source)

        assert result.usages == []
        assert result.warnings == []

    def test_line_numbers(self, js_matcher: JavaScriptMatcher):
        """Test usages carry 1-based line numbers."""
        source = "// config\n\nconst a = process.env.FIRST;\nconst b = process.env.SECOND;\n"
        result = js_matcher.discover("app.js", source)

        assert [(u.name, u.line_number) for u in result.usages] == [("FIRST", 3), ("SECOND", 4)]

    def test_typescript_source(self, js_matcher: JavaScriptMatcher):
        """Test a .ts file is handled by the same grammar."""
        source = "export const region = process.env.AWS_REGION;\n"
        result = js_matcher.discover("config.ts", source)

        assert [u.name for u in result.usages] == ["AWS_REGION"]

    def test_language(self, js_matcher: JavaScriptMatcher):
        """Test the matcher reports its language."""
        assert js_matcher.language == Language.JAVASCRIPT


class TestJavaScriptTypeInference:
    """Tests for JavaScript type inference."""

    def test_parse_int_is_high_integer(self, js_matcher: JavaScriptMatcher):
        """Test parseInt(process.env.PORT) is integer/high."""
        result = js_matcher.discover("app.js", "const port = parseInt(process.env.PORT);\n")

        usage = result.usages[0]
        assert usage.name == "PORT"
        assert usage.inferred_type == ConfigType.INTEGER
        assert usage.confidence == Confidence.HIGH

    def test_connection_string_beats_url(self, js_matcher: JavaScriptMatcher):
        """Test DATABASE_URL is a connection string, not a url."""
        result = js_matcher.discover("app.js", "const url = process.env.DATABASE_URL;\n")

        usage = result.usages[0]
        assert usage.inferred_type == ConfigType.CONNECTION_STRING
        assert usage.confidence == Confidence.MEDIUM

    def test_boolean_comparison(self, js_matcher: JavaScriptMatcher):
        """Test comparison with 'true' is boolean/medium."""
        result = js_matcher.discover("app.js", "const on = process.env.FEATURE_X === 'true';\n")

        usage = result.usages[0]
        assert usage.inferred_type == ConfigType.BOOLEAN
        assert usage.confidence == Confidence.MEDIUM

    def test_boolean_constructor(self, js_matcher: JavaScriptMatcher):
        """Test Boolean(...) is boolean/high."""
        result = js_matcher.discover("app.js", "const on = Boolean(process.env.FEATURE_X);\n")

        assert result.usages[0].inferred_type == ConfigType.BOOLEAN
        assert result.usages[0].confidence == Confidence.HIGH

    def test_new_url(self, js_matcher: JavaScriptMatcher):
        """Test new URL(...) is url/high."""
        result = js_matcher.discover("app.js", "const base = new URL(process.env.API_BASE);\n")

        assert result.usages[0].inferred_type == ConfigType.URL
        assert result.usages[0].confidence == Confidence.HIGH

    def test_unknown_name_is_low_string(self, js_matcher: JavaScriptMatcher):
        """Test a name without keywords falls back to string/low."""
        result = js_matcher.discover("app.js", "const r = process.env.REGION;\n")

        assert result.usages[0].inferred_type == ConfigType.STRING
        assert result.usages[0].confidence == Confidence.LOW


class TestJavaScriptDefaults:
    """Tests for default value detection."""

    def test_logical_or_default(self, js_matcher: JavaScriptMatcher):
        """Test process.env.X || 'value'."""
        result = js_matcher.discover("app.js", "const host = process.env.HOST || 'localhost';\n")

        assert result.usages[0].default_value == "localhost"

    def test_nullish_default(self, js_matcher: JavaScriptMatcher):
        """Test process.env.X ?? 30."""
        result = js_matcher.discover("app.js", "const t = process.env.TIMEOUT ?? 30;\n")

        assert result.usages[0].default_value == "30"

    def test_ternary_default(self, js_matcher: JavaScriptMatcher):
        """Test the alternative branch of a ternary on the access."""
        source = "const mode = process.env.MODE ? process.env.MODE : 'dev';\n"
        result = js_matcher.discover("app.js", source)

        assert result.usages[0].default_value == "dev"

    def test_right_operand_has_no_default(self, js_matcher: JavaScriptMatcher):
        """Test an access on the right of || gets no default."""
        result = js_matcher.discover("app.js", "const h = fallback || process.env.HOST;\n")

        assert result.usages[0].default_value is None

    def test_default_through_wrapping_call(self, js_matcher: JavaScriptMatcher):
        """Test parseInt(process.env.X) || 3000 takes the right operand."""
        source = "const port = parseInt(process.env.PORT) || 3000;\n"
        result = js_matcher.discover("app.js", source)

        assert result.usages[0].default_value == "3000"
        assert result.usages[0].inferred_type == ConfigType.INTEGER

    def test_nullish_default_through_wrapping_call(self, js_matcher: JavaScriptMatcher):
        """Test Number(process.env.X) ?? 5."""
        result = js_matcher.discover("app.js", "const n = Number(process.env.RETRIES) ?? 5;\n")

        assert result.usages[0].default_value == "5"

    def test_default_does_not_cross_statements(self, js_matcher: JavaScriptMatcher):
        """Test a default in a later statement is not picked up."""
        source = "function host() { return process.env.HOST; }\nconst h = host() || 'other';\n"
        result = js_matcher.discover("app.js", source)

        assert result.usages[0].default_value is None

    def test_no_default(self, js_matcher: JavaScriptMatcher):
        """Test a plain access has no default."""
        result = js_matcher.discover("app.js", "const h = process.env.HOST;\n")

        assert result.usages[0].default_value is None
