#!/usr/bin/env python3
"""
Initialize the HelpDesk Supabase schema with a direct PostgreSQL connection
"""
import os
import psycopg2
from dotenv import load_dotenv

load_dotenv()

TABLES = ["profiles", "user_roles", "tickets", "comments"]


def get_connection():
    """Get PostgreSQL connection using .env variables"""
    host = os.getenv("SUPABASE_DB_HOST")
    port = int(os.getenv("SUPABASE_DB_PORT", "6543"))
    database = os.getenv("SUPABASE_DB_NAME", "postgres")
    user = os.getenv("SUPABASE_DB_USER")
    password = os.getenv("SUPABASE_DB_PASSWORD")

    print(f"🔗 Connecting to: {host}:{port}")
    print(f"   Database: {database}")
    print(f"   User: {user}")

    return psycopg2.connect(
        host=host,
        port=port,
        database=database,
        user=user,
        password=password
    )


def create_schema():
    """Create database schema"""

    ddl_sql = """
    DO $$ BEGIN
        CREATE TYPE app_role AS ENUM ('user', 'agent', 'admin');
    EXCEPTION WHEN duplicate_object THEN NULL;
    END $$;

    -- Display names for comment authors
    CREATE TABLE IF NOT EXISTS profiles (
        id UUID PRIMARY KEY REFERENCES auth.users(id) ON DELETE CASCADE,
        full_name TEXT,
        created_at TIMESTAMPTZ DEFAULT NOW()
    );

    -- One role per user; grants upsert on user_id
    CREATE TABLE IF NOT EXISTS user_roles (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        user_id UUID NOT NULL REFERENCES auth.users(id) ON DELETE CASCADE,
        role app_role NOT NULL DEFAULT 'user',
        created_at TIMESTAMPTZ DEFAULT NOW(),
        CONSTRAINT user_roles_user_id_key UNIQUE (user_id)
    );

    CREATE TABLE IF NOT EXISTS tickets (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        title TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        status TEXT NOT NULL DEFAULT 'open'
            CHECK (status IN ('open', 'in_progress', 'resolved', 'closed')),
        priority TEXT NOT NULL DEFAULT 'medium'
            CHECK (priority IN ('low', 'medium', 'high', 'urgent')),
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        sla_deadline TIMESTAMPTZ NOT NULL,
        is_sla_breached BOOLEAN NOT NULL DEFAULT FALSE,
        created_by UUID NOT NULL REFERENCES auth.users(id),
        assigned_to UUID REFERENCES auth.users(id),
        resolved_at TIMESTAMPTZ
    );

    CREATE TABLE IF NOT EXISTS comments (
        id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        ticket_id UUID NOT NULL REFERENCES tickets(id) ON DELETE CASCADE,
        user_id UUID NOT NULL REFERENCES auth.users(id),
        content TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    );

    -- Indexes for performance
    CREATE INDEX IF NOT EXISTS idx_tickets_created_by ON tickets(created_by);
    CREATE INDEX IF NOT EXISTS idx_tickets_created_at ON tickets(created_at DESC);
    CREATE INDEX IF NOT EXISTS idx_tickets_status ON tickets(status);
    CREATE INDEX IF NOT EXISTS idx_comments_ticket_id ON comments(ticket_id, created_at);

    -- Role check usable from RLS policies
    CREATE OR REPLACE FUNCTION has_role(_user_id UUID, _role app_role)
    RETURNS BOOLEAN
    LANGUAGE sql STABLE SECURITY DEFINER SET search_path = public
    AS $fn$
        SELECT EXISTS (
            SELECT 1 FROM user_roles WHERE user_id = _user_id AND role = _role
        )
    $fn$;
    """

    rls_sql = """
    ALTER TABLE profiles ENABLE ROW LEVEL SECURITY;
    ALTER TABLE user_roles ENABLE ROW LEVEL SECURITY;
    ALTER TABLE tickets ENABLE ROW LEVEL SECURITY;
    ALTER TABLE comments ENABLE ROW LEVEL SECURITY;

    DROP POLICY IF EXISTS "Profiles are readable by signed-in users" ON profiles;
    CREATE POLICY "Profiles are readable by signed-in users" ON profiles
        FOR SELECT USING (auth.uid() IS NOT NULL);

    DROP POLICY IF EXISTS "Users read their own role" ON user_roles;
    CREATE POLICY "Users read their own role" ON user_roles
        FOR SELECT USING (user_id = auth.uid());

    DROP POLICY IF EXISTS "Requesters see own tickets, staff see all" ON tickets;
    CREATE POLICY "Requesters see own tickets, staff see all" ON tickets
        FOR SELECT USING (
            created_by = auth.uid()
            OR has_role(auth.uid(), 'agent')
            OR has_role(auth.uid(), 'admin')
        );

    DROP POLICY IF EXISTS "Requesters open tickets" ON tickets;
    CREATE POLICY "Requesters open tickets" ON tickets
        FOR INSERT WITH CHECK (created_by = auth.uid());

    DROP POLICY IF EXISTS "Staff update tickets" ON tickets;
    CREATE POLICY "Staff update tickets" ON tickets
        FOR UPDATE USING (has_role(auth.uid(), 'agent') OR has_role(auth.uid(), 'admin'));

    DROP POLICY IF EXISTS "Comments follow ticket visibility" ON comments;
    CREATE POLICY "Comments follow ticket visibility" ON comments
        FOR SELECT USING (EXISTS (SELECT 1 FROM tickets t WHERE t.id = ticket_id));

    DROP POLICY IF EXISTS "Signed-in users comment as themselves" ON comments;
    CREATE POLICY "Signed-in users comment as themselves" ON comments
        FOR INSERT WITH CHECK (user_id = auth.uid());
    """

    conn = None
    try:
        conn = get_connection()
        cur = conn.cursor()

        print("🔧 Creating database schema...")
        cur.execute(ddl_sql)
        conn.commit()
        print("✅ DDL executed successfully")

        print("🛡️ Applying RLS policies...")
        cur.execute(rls_sql)
        conn.commit()
        print("✅ RLS policies applied")

        cur.execute("""
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = 'public'
            AND table_name = ANY(%s)
            ORDER BY table_name
        """, (TABLES,))
        tables = cur.fetchall()

        print("\n📊 Created tables:")
        for table in tables:
            print(f"  - {table[0]}")

        for table_name in TABLES:
            cur.execute(f"SELECT COUNT(*) FROM {table_name}")
            count = cur.fetchone()[0]
            print(f"  {table_name}: {count} records")

        cur.close()
        return True

    except Exception as e:
        print(f"❌ Error: {str(e)}")
        if conn:
            conn.rollback()
        return False
    finally:
        if conn:
            conn.close()


if __name__ == "__main__":
    import sys
    success = create_schema()
    sys.exit(0 if success else 1)
