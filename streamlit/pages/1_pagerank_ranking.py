import streamlit as st
import pandas as pd
import sys
import os
from streamlit_agraph import agraph, Node, Edge, Config


# --- パス設定とモジュールのインポート ---
try:
    current_file_dir = os.path.dirname(os.path.abspath(__file__))
    project_root = os.path.abspath(os.path.join(current_file_dir, '..', '..'))
    if project_root not in sys.path:
        sys.path.append(project_root)

    from datagen.data_utils import generate_graph
    from pagerank.errors import PageRankError
    from pagerank.graph_model import CitationGraph
    from pagerank.ingestion import parse_edge_list
    from pagerank.output import format_perplexity_trace, format_scores
    from pagerank.pagerank import select_top_pages_by_pagerank
except (ImportError, ModuleNotFoundError) as e:
    st.error(f"必要なモジュールの読み込みに失敗しました: {e}")
    st.info("プロジェクトのディレクトリ構造が正しいか、必要なファイルが存在するか確認してください。")
    st.stop()


# --- 定数 ---
MAX_DRAWN_NODES = 60


# --- ヘルパー関数 ---
def load_graph_from_upload(uploaded_file):
    """アップロードされたエッジリストを読み込みます。"""
    try:
        lines = uploaded_file.getvalue().decode("utf-8").splitlines()
        return parse_edge_list(lines)
    except (PageRankError, UnicodeDecodeError) as e:
        st.error(f"グラフ読込エラー: {e}")
        return None


# --- セッションステートの初期化 ---
# このページ専用のキーを使用
if 'rank_graph' not in st.session_state:
    st.session_state.rank_graph = None
if 'rank_graph_name' not in st.session_state:
    st.session_state.rank_graph_name = "未選択"
if 'rank_results' not in st.session_state:
    st.session_state.rank_results = None


# --- サイドバー ---
st.sidebar.title("PageRank Ranking")
st.sidebar.header("Step 1: グラフを用意")

uploaded = st.sidebar.file_uploader("エッジリストファイル", type=["dat", "txt"])
if st.sidebar.button("ファイルを読み込み", disabled=uploaded is None):
    graph = load_graph_from_upload(uploaded)
    if graph is not None:
        st.session_state.rank_graph = graph
        st.session_state.rank_graph_name = uploaded.name
        st.session_state.rank_results = None  # 結果をリセット
        st.toast(f"`{uploaded.name}` を読み込みました。", icon="✅")
        st.rerun()

st.sidebar.markdown("または")
num_nodes = st.sidebar.slider("ノード数", 5, 500, 50, key="rank_num_nodes")
edge_density = st.sidebar.slider("辺密度", 0.01, 0.5, 0.05, key="rank_edge_density")
seed = st.sidebar.number_input("乱数シード", min_value=0, value=42, step=1, key="rank_seed")
if st.sidebar.button("ランダムグラフを生成", key="rank_generate"):
    G_generated = generate_graph(num_nodes, edge_density, seed=int(seed))
    st.session_state.rank_graph = CitationGraph.from_networkx(G_generated)
    st.session_state.rank_graph_name = f"新規生成 ({num_nodes}ノード, {G_generated.number_of_edges()}エッジ)"
    st.session_state.rank_results = None
    st.rerun()

# --- メインエリア ---
st.title("PageRank による引用グラフのランキング")

graph = st.session_state.get('rank_graph')

if graph is None:
    st.info("サイドバーからグラフを読み込むか生成してください。")
    st.stop()

if len(graph) == 0:
    st.error("グラフにノードがありません。")
    st.stop()

st.header(f"対象グラフ: `{st.session_state.rank_graph_name}`")
cols = st.columns(3)
cols[0].metric("ノード数", graph.number_of_nodes())
cols[1].metric("エッジ数", graph.number_of_edges())
cols[2].metric("シンクページ数", len(graph.sink_indices))
st.markdown("---")

# --- PageRank 設定 ---
st.sidebar.markdown("---")
st.sidebar.header("Step 2: PageRank を実行")

# スライダーは min == max を受け付けないため、1ページのグラフでは k=1 に固定
if len(graph) > 1:
    top_k = st.sidebar.slider("上位ページ数 (k)", 1, len(graph), min(10, len(graph)), key="rank_top_k")
else:
    top_k = 1
damping = st.sidebar.slider("減衰係数 (d)", 0.50, 0.99, 0.85, 0.01, key="rank_damping")
stable_rounds = st.sidebar.number_input("収束判定ラウンド数", min_value=1, value=4, step=1, key="rank_stable")

if st.sidebar.button("PageRank を実行", key="rank_run_button"):
    with st.spinner("PageRank を計算中..."):
        top_pages, result = select_top_pages_by_pagerank(
            graph, top_k, damping=damping, stable_rounds=int(stable_rounds)
        )
    st.session_state.rank_results = {"top": top_pages, "result": result}
    st.rerun()


# --- 結果表示 ---
if st.session_state.get('rank_results'):
    top_pages = st.session_state.rank_results["top"]
    result = st.session_state.rank_results["result"]
    st.header("計算結果")

    res_cols = st.columns(3)
    res_cols[0].metric("反復回数", result.iterations)
    res_cols[1].metric("最終パープレキシティ", f"{result.perplexities[-1]:.4f}")
    res_cols[2].metric("収束", "はい" if result.converged else "いいえ (上限到達)")

    st.subheader("パープレキシティの推移")
    trace_df = pd.DataFrame(
        {"perplexity": result.perplexities},
        index=pd.RangeIndex(1, len(result.perplexities) + 1, name="iteration"),
    )
    st.line_chart(trace_df)

    st.subheader(f"上位 {len(top_pages)} ページ")
    st.dataframe(result.to_frame(len(top_pages)), hide_index=True)

    dl_cols = st.columns(2)
    dl_cols[0].download_button(
        "perplexity.out をダウンロード",
        format_perplexity_trace(result.perplexities),
        file_name="perplexity.out",
    )
    dl_cols[1].download_button(
        "pr_scores.out をダウンロード",
        format_scores(result.score_map()),
        file_name="pr_scores.out",
    )

    # 上位ページとその間の引用関係のみを描画
    st.subheader("上位ページの引用関係")
    drawn = top_pages[:MAX_DRAWN_NODES]
    drawn_set = set(drawn)
    scores = result.score_map()
    max_score = max(scores[pid] for pid in drawn)

    nodes_v, edges_v = [], []
    for rank, pid in enumerate(drawn, start=1):
        size = 10 + 30 * scores[pid] / max_score
        color = "red" if rank <= 3 else "orange"
        nodes_v.append(Node(id=str(pid), label=f"{pid} (#{rank})", color=color, size=size))
    for pid in drawn:
        for target in graph.successors(pid):
            if target in drawn_set:
                edges_v.append(Edge(source=str(pid), target=str(target), color="#B0C4DE"))

    config_viz = Config(width="100%", height=600, directed=True, physics=True)
    st.caption("ノードの大きさ: PageRank スコア | 赤: 上位3ページ | エッジ: 引用元 → 被引用ページ")
    agraph(nodes=nodes_v, edges=edges_v, config=config_viz)
