"""
Adapters - Implementations of ports and the rule evaluation machinery.

Rule evaluation:
- PolicyFileAdapter: Evaluates policy file rules, first match wins
- FieldLookup: Fact and class token lookups
- CompoundDelegate: Leaf resolver for compound expressions
- locate_policy_file: Agent policy file with default fallback
- is_valid_agent_name: Agent names that stay inside policies/

Expression engine:
- CompoundMatcher: Tokenizer and evaluator for and/or/not expressions
- DataFunctionRegistry: Functions callable from policy files

Node data:
- MemoryFactAdapter / MemoryClassificationAdapter: In-memory (testing)
- YAMLFactAdapter: YAML facts file
- ClassesFileAdapter: One class per line

Configuration:
- MemoryConfigAdapter: Options in a dict
- ServerConfigAdapter: server.cfg style file
- EnvConfigAdapter: Environment variables
"""

# Rule evaluation
from action_policy.adapters.field_lookup import FieldLookup
from action_policy.adapters.compound_delegate import CompoundDelegate
from action_policy.adapters.policy_locator import is_valid_agent_name, locate_policy_file
from action_policy.adapters.policy_file import PolicyFileAdapter

# Expression engine
from action_policy.adapters.compound_matcher import CompoundMatcher, DataFunctionRegistry

# Node data
from action_policy.adapters.memory_facts import MemoryFactAdapter, MemoryClassificationAdapter
from action_policy.adapters.yaml_facts import YAMLFactAdapter
from action_policy.adapters.classes_file import ClassesFileAdapter

# Configuration
from action_policy.adapters.memory_config import MemoryConfigAdapter
from action_policy.adapters.server_config import ServerConfigAdapter
from action_policy.adapters.env_config import EnvConfigAdapter

__all__ = [
    # Rule evaluation
    "FieldLookup",
    "CompoundDelegate",
    "is_valid_agent_name",
    "locate_policy_file",
    "PolicyFileAdapter",
    # Expression engine
    "CompoundMatcher",
    "DataFunctionRegistry",
    # Node data
    "MemoryFactAdapter",
    "MemoryClassificationAdapter",
    "YAMLFactAdapter",
    "ClassesFileAdapter",
    # Configuration
    "MemoryConfigAdapter",
    "ServerConfigAdapter",
    "EnvConfigAdapter",
]
