"""create volunteers, classes and notebooks tables

Revision ID: 4a7c2e91d3b0
Revises:
Create Date: 2026-10-19 10:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4a7c2e91d3b0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'voluntarios',
        sa.Column('idvol', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('nome', sa.Text(), nullable=False),
        sa.Column('e-mail', sa.Text(), nullable=False),
    )
    op.create_index('ix_voluntarios_e-mail', 'voluntarios', ['e-mail'], unique=True)

    op.create_table(
        'pep',
        sa.Column('idpep', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('nome', sa.Text(), nullable=True),
        sa.Column('directory', sa.Text(), nullable=True),
    )

    op.create_table(
        'cadernos',
        sa.Column('idcad', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('idvol', sa.Integer(), sa.ForeignKey('voluntarios.idvol'), nullable=True),
        sa.Column('idpep', sa.Integer(), sa.ForeignKey('pep.idpep'), nullable=True),
        sa.Column('nome do(a) aluno(a)', sa.Text(), nullable=True),
        sa.Column('número de matrícula do(a) aluno(a)', sa.Text(), nullable=True),
        sa.Column('unidade prisional do(a) aluno(a)', sa.Text(), nullable=True),
        *[sa.Column(f'tema {i}', sa.Text(), nullable=True) for i in range(1, 11)],
        sa.Column('conteúdos relevantes', sa.Text(), nullable=True),
        *[sa.Column(f'a{i}', sa.Text(), nullable=True) for i in range(1, 14)],
        sa.Column('conclusão do avaliador', sa.Text(), nullable=True),
        sa.Column('exclusão de arquivos recebidos', sa.Text(), nullable=True),
        sa.Column('Carimbo de data/hora', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('datareserva', sa.TIMESTAMP(timezone=True), nullable=True),
    )
    op.create_index('idx_cadernos_idvol', 'cadernos', ['idvol'], unique=False)
    op.create_index('idx_cadernos_availability', 'cadernos', ['datareserva', 'Carimbo de data/hora'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_cadernos_availability', table_name='cadernos')
    op.drop_index('idx_cadernos_idvol', table_name='cadernos')
    op.drop_table('cadernos')
    op.drop_table('pep')
    op.drop_index('ix_voluntarios_e-mail', table_name='voluntarios')
    op.drop_table('voluntarios')
