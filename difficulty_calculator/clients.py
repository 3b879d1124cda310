from difficulty_calculator.adapters.database import Database
from difficulty_calculator.rulesets import RulesetRegistry

database: Database
rulesets: RulesetRegistry
