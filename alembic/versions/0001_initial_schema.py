"""Initial schema: departments, users, assets, complaints, call logs, PM reports

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

ENUMS = {
    'user_role':          ('Admin', 'Engineer'),
    'asset_category':     ('PC/CPU', 'Printer', 'Router', 'OS', 'License', 'Storage'),
    'asset_status':       ('Active', 'In Repair'),
    'coverage_type':      ('AMC', 'Warranty'),
    'complaint_status':   ('Open', 'In Progress', 'Resolved'),
    'complaint_priority': ('Low', 'Medium', 'High', 'Critical'),
    'call_type':          ('Phone', 'Email', 'Walk-in'),
    'call_status':        ('Open', 'In Progress', 'Closed'),
    'report_type':        ('Maintenance', 'Inspection', 'Repair'),
    'report_status':      ('Pending', 'Reviewed', 'Approved'),
}


def _enum(name: str) -> sa.Enum:
    return sa.Enum(*ENUMS[name], name=name)


def upgrade() -> None:
    op.create_table(
        'departments',
        sa.Column('dept_id', sa.Integer, primary_key=True),
        sa.Column('dept_name', sa.String(100), nullable=False, unique=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_departments_dept_id', 'departments', ['dept_id'])

    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer, primary_key=True),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('user_role', _enum('user_role'), nullable=False),
        sa.Column('dept_id', sa.Integer, sa.ForeignKey('departments.dept_id'), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_user_id', 'users', ['user_id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'assets',
        sa.Column('asset_id', sa.Integer, primary_key=True),
        sa.Column('asset_name', sa.String(200), nullable=False),
        sa.Column('category', _enum('asset_category'), nullable=False),
        sa.Column('serial_number', sa.String(100), nullable=False),
        sa.Column('status', _enum('asset_status'), nullable=False),
        sa.Column('location', sa.String(200), nullable=True),
        sa.Column('purchase_date', sa.Date, nullable=True),
        sa.Column('warranty_expiry', sa.Date, nullable=True),
        sa.Column('amc_or_warranty', _enum('coverage_type'), nullable=True),
        sa.Column('inventory_count', sa.Integer, nullable=False),
        sa.Column('vendor_name', sa.String(200), nullable=True),
        sa.Column('dept_id', sa.Integer, sa.ForeignKey('departments.dept_id'), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('inventory_count >= 0', name='chk_inventory_non_negative'),
    )
    op.create_index('ix_assets_asset_id', 'assets', ['asset_id'])
    op.create_index('ix_assets_serial_number', 'assets', ['serial_number'])
    op.create_index('ix_assets_dept_id', 'assets', ['dept_id'])

    op.create_table(
        'complaints',
        sa.Column('comp_id', sa.Integer, primary_key=True),
        sa.Column('asset_id', sa.Integer, sa.ForeignKey('assets.asset_id'), nullable=False),
        sa.Column('raised_by', sa.Integer, sa.ForeignKey('users.user_id'), nullable=False),
        sa.Column('issue', sa.Text, nullable=False),
        sa.Column('comp_status', _enum('complaint_status'), nullable=False),
        sa.Column('priority', _enum('complaint_priority'), nullable=False),
        sa.Column('creation_time', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('eng_assigned', sa.Integer, sa.ForeignKey('users.user_id'), nullable=True),
        sa.Column('expected_res_date', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('spare_req', sa.String(255), nullable=True),
        sa.Column('total_time_taken', sa.String(20), nullable=True),
        sa.Column('actual_res_date', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('comp_type', sa.String(100), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index('ix_complaints_comp_id', 'complaints', ['comp_id'])
    op.create_index('ix_complaints_asset_id', 'complaints', ['asset_id'])

    op.create_table(
        'call_logs',
        sa.Column('call_id', sa.Integer, primary_key=True),
        sa.Column('call_type', _enum('call_type'), nullable=False),
        sa.Column('contact_person', sa.String(150), nullable=False),
        sa.Column('contact_number', sa.String(50), nullable=True),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('handled_by', sa.String(100), nullable=True),
        sa.Column('status', _enum('call_status'), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_call_logs_call_id', 'call_logs', ['call_id'])

    op.create_table(
        'pm_reports',
        sa.Column('report_id', sa.Integer, primary_key=True),
        sa.Column('asset_id', sa.Integer, sa.ForeignKey('assets.asset_id'), nullable=False),
        sa.Column('report_type', _enum('report_type'), nullable=False),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('file_path', sa.String(500), nullable=False),
        sa.Column('file_size', sa.Integer, nullable=True),
        sa.Column('uploaded_by', sa.Integer, sa.ForeignKey('users.user_id'), nullable=False),
        sa.Column('status', _enum('report_status'), nullable=False),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('uploaded_at', sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('reviewed_at', sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index('ix_pm_reports_report_id', 'pm_reports', ['report_id'])
    op.create_index('ix_pm_reports_asset_id', 'pm_reports', ['asset_id'])


def downgrade() -> None:
    for table in ('pm_reports', 'call_logs', 'complaints', 'assets', 'users', 'departments'):
        op.drop_table(table)

    bind = op.get_bind()
    for name in ENUMS:
        sa.Enum(name=name).drop(bind, checkfirst=True)
