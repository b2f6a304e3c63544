"""Create servers table

Revision ID: 0001
Revises:
Create Date: 2024-01-15 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """建立伺服器清單表"""
    op.create_table(
        'servers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False, comment='伺服器唯一識別碼'),
        sa.Column('name', sa.String(length=100), nullable=False, comment='伺服器名稱'),
        sa.Column('ip', sa.String(length=50), nullable=False, comment='IP位址'),
        sa.Column('port', sa.Integer(), nullable=True, server_default='22', comment='SSH連接埠'),
        sa.Column('status', sa.String(length=20), nullable=True, server_default='running', comment='狀態'),
        sa.Column('cpu', sa.Integer(), nullable=True, server_default='0', comment='CPU使用率'),
        sa.Column('memory', sa.Integer(), nullable=True, server_default='0', comment='記憶體使用率'),
        sa.Column('remark', sa.String(length=500), nullable=True, comment='備註'),
        sa.Column('created_at', sa.DateTime(), nullable=False, comment='建立時間'),
        sa.Column('updated_at', sa.DateTime(), nullable=False, comment='更新時間'),
        sa.PrimaryKeyConstraint('id', name='pk_servers'),
        comment='伺服器清單表',
        mysql_charset='utf8mb4',
    )
    op.create_index('idx_servers_status', 'servers', ['status'])


def downgrade() -> None:
    """刪除伺服器清單表"""
    op.drop_index('idx_servers_status', table_name='servers')
    op.drop_table('servers')
