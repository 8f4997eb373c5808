"""Unit tests for contract identifier parsing."""

import pytest

from proxy_upgrades.exceptions import ParseError
from proxy_upgrades.identifiers import fully_qualified_name, parse_identifier
from proxy_upgrades.types import ContractIdentifier, ContractInfo


class TestSourceFileForm:
    """Test the "Name.sol" form."""

    @pytest.mark.parametrize("name", ["Greeter", "MyToken", "A", "ERC20Upgradeable"])
    def test_short_name_is_file_stem(self, name: str):
        """Test that "X.sol" yields short name X and lookup key X.sol."""
        result = parse_identifier(f"{name}.sol")

        assert result == ContractIdentifier(file_name=f"{name}.sol", short_name=name)

    def test_source_path_is_keyed_by_file_name(self):
        """Test that leading source directories are dropped from the lookup key."""
        result = parse_identifier("src/proxy/Greeter.sol")

        assert result == ContractIdentifier(file_name="Greeter.sol", short_name="Greeter")

    def test_bare_suffix_is_rejected(self):
        """Test that ".sol" with no stem is not accepted."""
        with pytest.raises(ParseError):
            parse_identifier(".sol")


class TestQualifiedForm:
    """Test the "Name.sol:ShortName" form."""

    @pytest.mark.parametrize(
        "file_stem,short_name",
        [("Greeter", "Greeter"), ("Tokens", "MyToken"), ("Proxy", "ProxyAdmin")],
    )
    def test_splits_at_separator(self, file_stem: str, short_name: str):
        """Test that "X.sol:Y" yields file name X.sol and short name Y."""
        result = parse_identifier(f"{file_stem}.sol:{short_name}")

        assert result == ContractIdentifier(file_name=f"{file_stem}.sol", short_name=short_name)

    @pytest.mark.parametrize(
        "identifier",
        [
            "Greeter.sol:",
            ":Greeter",
            "Greeter:Greeter",
            "Greeter.sol:Greeter:Extra",
            "A.sol:B.sol:C",
        ],
    )
    def test_malformed_qualified_names_are_rejected(self, identifier: str):
        """Test that empty parts, missing suffix or extra separators fail."""
        with pytest.raises(ParseError):
            parse_identifier(identifier)


class TestArtifactPathForm:
    """Test the "out/Name.sol/ShortName.json" form."""

    def test_artifact_path(self):
        """Test the directory segment is the file name and the base name the short name."""
        result = parse_identifier("out/Greeter.sol/Greeter.json")

        assert result.short_name == "Greeter"
        assert result.file_name == "Greeter.sol"

    def test_artifact_path_with_different_short_name(self):
        """Test a source file holding a differently named contract."""
        result = parse_identifier("/abs/project/out/Tokens.sol/MyToken.json")

        assert result == ContractIdentifier(file_name="Tokens.sol", short_name="MyToken")

    @pytest.mark.parametrize("identifier", ["Greeter.json", "out/.json", "/Greeter.json"])
    def test_incomplete_artifact_paths_are_rejected(self, identifier: str):
        """Test that an artifact path needs both a directory and a base name."""
        with pytest.raises(ParseError):
            parse_identifier(identifier)


class TestMalformedIdentifiers:
    """Test rejection of identifiers matching no accepted form."""

    @pytest.mark.parametrize(
        "identifier", ["Greeter", "", "Greeter.vy", "out/Greeter", "Greeter.sol.bak"]
    )
    def test_raises_parse_error(self, identifier: str):
        """Test that unrecognised shapes raise ParseError."""
        with pytest.raises(ParseError):
            parse_identifier(identifier)

    def test_message_lists_accepted_formats(self):
        """Test that the error names all three accepted formats."""
        with pytest.raises(ParseError) as exc_info:
            parse_identifier("Greeter")

        message = str(exc_info.value)
        assert "Greeter" in message
        assert "MyContract.sol:MyContract" in message
        assert "MyContract.sol" in message
        assert "out/MyContract.sol/MyContract.json" in message

    def test_parse_error_is_value_error(self):
        """Test that ParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_identifier("Greeter")


def test_fully_qualified_name():
    """Test that the fully qualified name joins source path and short name."""
    info = ContractInfo(
        contract_path="src/Greeter.sol", short_name="Greeter", bytecode="0xAB12", license="MIT"
    )

    assert fully_qualified_name(info) == "src/Greeter.sol:Greeter"
