"""Schema history, oldest first.  Append new versions; never edit applied ones."""

from agro.migrations.descriptors import SchemaChange, SchemaObject, validate_history

INITIAL_SCHEMA = SchemaChange(
    name="1732406400000_initial_schema",
    tables=(
        SchemaObject(
            name="producers",
            create="""
                CREATE TABLE "producers" (
                    "id" varchar PRIMARY KEY NOT NULL,
                    "document" varchar(14) NOT NULL,
                    "name" varchar(255) NOT NULL,
                    "created_at" datetime NOT NULL DEFAULT (datetime('now')),
                    "updated_at" datetime NOT NULL DEFAULT (datetime('now')),
                    CONSTRAINT "UQ_producers_document" UNIQUE ("document")
                )
            """,
            drop='DROP TABLE "producers"',
        ),
        SchemaObject(
            name="farms",
            create="""
                CREATE TABLE "farms" (
                    "id" varchar PRIMARY KEY NOT NULL,
                    "name" varchar(255) NOT NULL,
                    "city" varchar(255) NOT NULL,
                    "state" varchar(2) NOT NULL,
                    "total_area" decimal(10,2) NOT NULL,
                    "arable_area" decimal(10,2) NOT NULL,
                    "vegetation_area" decimal(10,2) NOT NULL,
                    "producer_id" varchar NOT NULL,
                    "created_at" datetime NOT NULL DEFAULT (datetime('now')),
                    "updated_at" datetime NOT NULL DEFAULT (datetime('now')),
                    CONSTRAINT "FK_farms_producer" FOREIGN KEY ("producer_id")
                        REFERENCES "producers" ("id") ON DELETE CASCADE ON UPDATE NO ACTION
                )
            """,
            drop='DROP TABLE "farms"',
        ),
        SchemaObject(
            name="harvests",
            create="""
                CREATE TABLE "harvests" (
                    "id" varchar PRIMARY KEY NOT NULL,
                    "year" varchar(20) NOT NULL,
                    "description" text,
                    "created_at" datetime NOT NULL DEFAULT (datetime('now')),
                    "updated_at" datetime NOT NULL DEFAULT (datetime('now')),
                    CONSTRAINT "UQ_harvests_year" UNIQUE ("year")
                )
            """,
            drop='DROP TABLE "harvests"',
        ),
        SchemaObject(
            name="farm_harvests",
            create="""
                CREATE TABLE "farm_harvests" (
                    "id" varchar PRIMARY KEY NOT NULL,
                    "farm_id" varchar NOT NULL,
                    "harvest_id" varchar NOT NULL,
                    "created_at" datetime NOT NULL DEFAULT (datetime('now')),
                    "updated_at" datetime NOT NULL DEFAULT (datetime('now')),
                    CONSTRAINT "FK_farm_harvests_farm" FOREIGN KEY ("farm_id")
                        REFERENCES "farms" ("id") ON DELETE CASCADE ON UPDATE NO ACTION,
                    CONSTRAINT "FK_farm_harvests_harvest" FOREIGN KEY ("harvest_id")
                        REFERENCES "harvests" ("id") ON DELETE CASCADE ON UPDATE NO ACTION
                )
            """,
            drop='DROP TABLE "farm_harvests"',
        ),
        SchemaObject(
            name="farm_harvest_crops",
            create="""
                CREATE TABLE "farm_harvest_crops" (
                    "id" varchar PRIMARY KEY NOT NULL,
                    "farm_harvest_id" varchar NOT NULL,
                    "crop_type" varchar(50) NOT NULL,
                    "created_at" datetime NOT NULL DEFAULT (datetime('now')),
                    "updated_at" datetime NOT NULL DEFAULT (datetime('now')),
                    CONSTRAINT "FK_farm_harvest_crops_farm_harvest" FOREIGN KEY ("farm_harvest_id")
                        REFERENCES "farm_harvests" ("id") ON DELETE CASCADE ON UPDATE NO ACTION
                )
            """,
            drop='DROP TABLE "farm_harvest_crops"',
        ),
    ),
    indexes=(
        SchemaObject(
            name="IDX_farms_producer_id",
            create='CREATE INDEX "IDX_farms_producer_id" ON "farms" ("producer_id")',
            drop='DROP INDEX "IDX_farms_producer_id"',
        ),
        SchemaObject(
            name="IDX_farm_harvests_farm_id",
            create='CREATE INDEX "IDX_farm_harvests_farm_id" ON "farm_harvests" ("farm_id")',
            drop='DROP INDEX "IDX_farm_harvests_farm_id"',
        ),
        SchemaObject(
            name="IDX_farm_harvests_harvest_id",
            create='CREATE INDEX "IDX_farm_harvests_harvest_id" ON "farm_harvests" ("harvest_id")',
            drop='DROP INDEX "IDX_farm_harvests_harvest_id"',
        ),
        SchemaObject(
            name="IDX_farm_harvest_crops_farm_harvest_id",
            create=(
                'CREATE INDEX "IDX_farm_harvest_crops_farm_harvest_id" '
                'ON "farm_harvest_crops" ("farm_harvest_id")'
            ),
            drop='DROP INDEX "IDX_farm_harvest_crops_farm_harvest_id"',
        ),
    ),
)

CREATE_CITIES = SchemaChange(
    name="1732406500000_create_cities",
    tables=(
        SchemaObject(
            name="cities",
            create="""
                CREATE TABLE "cities" (
                    "id" varchar PRIMARY KEY NOT NULL,
                    "name" varchar(255) NOT NULL,
                    "state" varchar(2) NOT NULL,
                    "ibge_code" varchar(7) NOT NULL,
                    "created_at" datetime NOT NULL DEFAULT (datetime('now')),
                    "updated_at" datetime NOT NULL DEFAULT (datetime('now')),
                    CONSTRAINT "UQ_cities_ibge_code" UNIQUE ("ibge_code")
                )
            """,
            drop='DROP TABLE "cities"',
        ),
    ),
    indexes=(
        SchemaObject(
            name="IDX_cities_state",
            create='CREATE INDEX "IDX_cities_state" ON "cities" ("state")',
            drop='DROP INDEX "IDX_cities_state"',
        ),
        SchemaObject(
            name="IDX_cities_name_state",
            create='CREATE INDEX "IDX_cities_name_state" ON "cities" ("name", "state")',
            drop='DROP INDEX "IDX_cities_name_state"',
        ),
    ),
)

# Dashboard aggregates group farms by state and crops by type.
ADD_PERFORMANCE_INDEXES = SchemaChange(
    name="1732500000000_add_performance_indexes",
    indexes=(
        SchemaObject(
            name="IDX_farms_state",
            create='CREATE INDEX "IDX_farms_state" ON "farms" ("state")',
            drop='DROP INDEX "IDX_farms_state"',
        ),
        SchemaObject(
            name="IDX_farm_harvest_crops_crop_type",
            create=(
                'CREATE INDEX "IDX_farm_harvest_crops_crop_type" '
                'ON "farm_harvest_crops" ("crop_type")'
            ),
            drop='DROP INDEX "IDX_farm_harvest_crops_crop_type"',
        ),
    ),
)

MIGRATIONS: tuple[SchemaChange, ...] = validate_history(
    [
        INITIAL_SCHEMA,
        CREATE_CITIES,
        ADD_PERFORMANCE_INDEXES,
    ]
)
