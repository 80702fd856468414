from sqlalchemy import BigInteger, Integer

# SQLite only auto-increments INTEGER primary keys; production runs BIGINT.
BigIntId = BigInteger().with_variant(Integer(), "sqlite")
